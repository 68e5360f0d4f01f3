import logging

from django.conf import settings
from django.core.cache import cache

from apps.integrations.msg91_service import MSG91Service

logger = logging.getLogger(__name__)


def generate_otp():
    # No random challenge: every login/registration uses the fixed code
    return settings.OTP_FIXED_CODE


def verify_otp_code(otp):
    return otp == settings.OTP_FIXED_CODE


def send_auth_otp(phone, otp):
    # Send OTP on mobile only if OTP_DEBUG_FLAG is set to NO
    if settings.OTP_DEBUG_FLAG == "NO":
        success = MSG91Service.send_otp(phone, otp)
        if success:
            return True
    # Development fallback, the fixed code is the OTP
    logger.info("OTP for %s is %s (SMS not sent)", phone, otp)
    return True


# ==================== Pending OTP state ====================

def _pending_registration_key(phone):
    return f"pending_registration_{phone}"


def _otp_pending_key(phone):
    return f"otp_pending_{phone}"


def stage_registration(data):
    """Keep registration details until the OTP for that phone is verified."""
    payload = {
        'name': data.get('name', ''),
        'phone': data.get('phone', ''),
        'email': data.get('email') or None,
        'age': data.get('age'),
    }
    cache.set(_pending_registration_key(payload['phone']), payload,
              timeout=settings.PENDING_REGISTRATION_EXPIRY)
    return payload


def get_pending_registration(phone):
    return cache.get(_pending_registration_key(phone))


def mark_otp_pending(phone):
    cache.set(_otp_pending_key(phone), True, timeout=settings.OTP_EXPIRY)


def is_otp_pending(phone):
    return bool(cache.get(_otp_pending_key(phone)))


def clear_pending_state(phone):
    cache.delete(_pending_registration_key(phone))
    cache.delete(_otp_pending_key(phone))
