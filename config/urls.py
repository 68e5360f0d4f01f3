from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenRefreshView

from apps.authentication.views import (
    RegisterView, SendOTPView, VerifyOTPView, CancelOTPView, MeView, LogoutView,
)

urlpatterns = [
    path('admin/', admin.site.urls),

    # Auth
    path('api/auth/register/', RegisterView.as_view(), name='register'),
    path('api/auth/send-otp/', SendOTPView.as_view(), name='send-otp'),
    path('api/auth/verify-otp/', VerifyOTPView.as_view(), name='verify-otp'),
    path('api/auth/cancel-otp/', CancelOTPView.as_view(), name='cancel-otp'),
    path('api/auth/me/', MeView.as_view(), name='me'),
    path('api/auth/logout/', LogoutView.as_view(), name='logout'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    # Documents
    path('api/', include('apps.documents.urls')),

    # Sharing
    path('api/', include('apps.sharing.urls')),
]
