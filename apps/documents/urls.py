from django.urls import path

from . import views

urlpatterns = [
    path('documents/', views.DocumentListCreateView.as_view(), name='document-list'),
    path('documents/extract/', views.ExtractDocumentInfoView.as_view(), name='document-extract'),
    path('documents/shared/', views.SharedWithMeView.as_view(), name='document-shared'),
    path('documents/<uuid:pk>/', views.DocumentDetailView.as_view(), name='document-detail'),
    path('documents/<uuid:pk>/edits/', views.DocumentEditListView.as_view(), name='document-edits'),
]
