from django.urls import path

from . import views

urlpatterns = [
    path('documents/<uuid:pk>/invite-code/', views.InviteCodeView.as_view(), name='document-invite-code'),
    path('documents/<uuid:pk>/share/', views.ShareAccessView.as_view(), name='document-share'),
    path('documents/<uuid:pk>/share/<uuid:user_id>/', views.RevokeAccessView.as_view(), name='document-revoke'),
    path('sharing/access/', views.UsersWithAccessView.as_view(), name='sharing-access'),
]
