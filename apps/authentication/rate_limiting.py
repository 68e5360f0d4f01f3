"""
Cache-backed throttles.

Two kinds of limits live here: a resend cooldown for OTP messages (per phone)
and a failed-attempt window for anything that checks a code (OTP verification
per phone, invite code redemption per user).
"""
from django.core.cache import cache
from django.utils import timezone


def _cooldown_key(action, phone):
    return f"otp_rate_limit:{action}:{phone}"


def _attempts_key(action, identifier):
    return f"code_attempts:{action}:{str(identifier).lower()}"


def _current_window(cache_key, window_minutes):
    """
    Returns (attempts_data, elapsed_seconds). A window older than
    `window_minutes` is handed back as a fresh, empty one.
    """
    now = timezone.now()
    attempts_data = cache.get(cache_key) or {'count': 0, 'first_attempt': now}
    elapsed = (now - attempts_data['first_attempt']).total_seconds()
    if elapsed > window_minutes * 60:
        return {'count': 0, 'first_attempt': now}, 0
    return attempts_data, elapsed


def check_otp_rate_limit(phone, action='otp_send', limit_seconds=30):
    """
    Start the resend cooldown for a phone, unless one is already running.

    Args:
        phone: Phone number the OTP goes to
        action: Action type (e.g., 'otp_send')
        limit_seconds: Cooldown period in seconds

    Returns:
        tuple: (is_allowed: bool, wait_time: int) where wait_time is seconds remaining
    """
    cache_key = _cooldown_key(action, phone)
    last_sent = cache.get(cache_key)
    now = timezone.now()

    if last_sent:
        remaining = limit_seconds - (now - last_sent).total_seconds()
        if remaining > 0:
            return False, int(remaining)

    cache.set(cache_key, now, timeout=limit_seconds)
    return True, 0


def check_code_attempt_limit(identifier, action='verification', max_attempts=5, window_minutes=10):
    """
    Check whether another code attempt is allowed. Does not count the attempt.

    Returns:
        tuple: (is_allowed: bool, attempts_remaining: int, reset_time: int)
    """
    attempts_data, elapsed = _current_window(_attempts_key(action, identifier), window_minutes)

    if attempts_data['count'] >= max_attempts:
        return False, 0, int(window_minutes * 60 - elapsed)
    return True, max_attempts - attempts_data['count'], 0


def increment_failed_attempts(identifier, action='verification', max_attempts=5, window_minutes=10):
    """Record a failed attempt. Returns the attempts left in the current window."""
    cache_key = _attempts_key(action, identifier)
    attempts_data, _ = _current_window(cache_key, window_minutes)
    attempts_data['count'] += 1
    cache.set(cache_key, attempts_data, timeout=window_minutes * 60)
    return max(0, max_attempts - attempts_data['count'])


def clear_failed_attempts(identifier, action='verification'):
    cache.delete(_attempts_key(action, identifier))
