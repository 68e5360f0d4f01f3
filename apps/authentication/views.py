import logging

from django.conf import settings
from rest_framework import views, status, permissions
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User
from .serializers import (
    RegisterSerializer, SendOTPSerializer, VerifyOTPSerializer,
    UserSerializer, UpdateProfileSerializer,
)
from .utils import (
    generate_otp, send_auth_otp, verify_otp_code,
    stage_registration, get_pending_registration,
    mark_otp_pending, clear_pending_state,
)
from .rate_limiting import (
    check_otp_rate_limit, check_code_attempt_limit,
    increment_failed_attempts, clear_failed_attempts,
)

logger = logging.getLogger(__name__)


class RegisterView(views.APIView):
    """Stage registration details and send the OTP. No account exists until the OTP is verified."""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        pending = stage_registration(data)
        logger.info("Registration staged for %s", pending['phone'])

        otp = generate_otp()
        mark_otp_pending(pending['phone'])
        send_auth_otp(pending['phone'], otp)

        return Response({
            "message": "Registration details saved. OTP sent.",
            "identifier": pending['phone'],
        }, status=status.HTTP_201_CREATED)


class SendOTPView(views.APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = SendOTPSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        phone = serializer.validated_data['phone']

        is_allowed, wait_time = check_otp_rate_limit(
            phone, action='otp_send', limit_seconds=settings.OTP_RESEND_COOLDOWN
        )
        if not is_allowed:
            return Response({
                "error": f"OTP sent recently. Please wait {wait_time} seconds before requesting another."
            }, status=status.HTTP_429_TOO_MANY_REQUESTS)

        otp = generate_otp()
        mark_otp_pending(phone)
        send_auth_otp(phone, otp)
        logger.info("OTP sent to %s", phone)

        return Response({"message": "OTP sent.", "identifier": phone}, status=status.HTTP_200_OK)


class VerifyOTPView(views.APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        """
        Expecting:
        {
            "phone": "<phone>",
            "otp": "123456"
        }
        Completes a staged registration when one exists for the phone, otherwise logs in.
        """
        serializer = VerifyOTPSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        phone = serializer.validated_data['phone']
        otp = serializer.validated_data['otp']

        # Only wrong guesses are throttled, the fixed code always gets through
        if not verify_otp_code(otp):
            is_allowed, attempts_remaining, reset_time = check_code_attempt_limit(
                phone, action='otp', max_attempts=5, window_minutes=10
            )
            if not is_allowed:
                return Response({
                    "error": f"Too many failed attempts. Please try again in {reset_time} seconds."
                }, status=status.HTTP_429_TOO_MANY_REQUESTS)

            increment_failed_attempts(phone, action='otp')
            logger.warning("OTP verify failed for %s", phone)
            return Response({"error": "Invalid OTP. Please try again."}, status=status.HTTP_400_BAD_REQUEST)

        pending = get_pending_registration(phone)
        if pending:
            if not pending.get('name') or not pending.get('phone'):
                return Response({"error": "Missing required user information."}, status=status.HTTP_400_BAD_REQUEST)

            user = User.objects.filter(phone=phone).first()
            if user:
                user.name = pending['name']
                user.email = pending.get('email')
                user.age = pending.get('age')
                user.save(update_fields=['name', 'email', 'age', 'updated_at'])
                logger.info("Registration updated existing profile %s (user_id=%s)", phone, user.id)
            else:
                user = User.objects.create_user(
                    phone=phone,
                    name=pending['name'],
                    email=pending.get('email'),
                    age=pending.get('age'),
                )
                logger.info("Account created for %s (user_id=%s)", phone, user.id)
            message = "Account created successfully!"
        else:
            user = User.objects.filter(phone=phone, is_active=True).first()
            if not user:
                logger.warning("OTP verify: user not found for %s", phone)
                return Response({"error": "User not found. Please register first."}, status=status.HTTP_404_NOT_FOUND)
            logger.info("Login success for %s (user_id=%s)", phone, user.id)
            message = "Welcome back!"

        clear_pending_state(phone)
        clear_failed_attempts(phone, action='otp')

        refresh = RefreshToken.for_user(user)
        return Response({
            'message': message,
            'refresh': str(refresh),
            'access': str(refresh.access_token),
            'user': UserSerializer(user).data
        }, status=status.HTTP_200_OK)


class CancelOTPView(views.APIView):
    """Abandon a pending OTP challenge and any staged registration."""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = SendOTPSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        clear_pending_state(serializer.validated_data['phone'])
        return Response({"message": "Verification cancelled."}, status=status.HTTP_200_OK)


class MeView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def patch(self, request):
        """Only name, email and age can be edited. The phone number is the login key."""
        disallowed_fields = set(request.data.keys()) - {'name', 'email', 'age'}
        if disallowed_fields:
            return Response({
                "error": f"Cannot update: {', '.join(sorted(disallowed_fields))}"
            }, status=status.HTTP_400_BAD_REQUEST)

        serializer = UpdateProfileSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = request.user
        data = serializer.validated_data
        if 'email' in data:
            data['email'] = data['email'] or None
        for field, value in data.items():
            setattr(user, field, value)
        user.save()

        return Response(UserSerializer(user).data)


class LogoutView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        refresh = request.data.get('refresh')
        if not refresh:
            return Response({"error": "refresh token required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info("Logout for user_id=%s", request.user.id)
        return Response({"message": "Logged out successfully."}, status=status.HTTP_200_OK)
