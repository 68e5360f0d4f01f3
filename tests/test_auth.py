from unittest import mock

import pytest
from rest_framework.test import APIClient

from apps.authentication.models import User
from apps.authentication.utils import is_otp_pending, get_pending_registration

pytestmark = pytest.mark.django_db

REGISTER_URL = '/api/auth/register/'
SEND_OTP_URL = '/api/auth/send-otp/'
VERIFY_URL = '/api/auth/verify-otp/'
CANCEL_URL = '/api/auth/cancel-otp/'
ME_URL = '/api/auth/me/'


def _register(client, phone='5550001111', name='Dana Driver', **extra):
    return client.post(REGISTER_URL, {'name': name, 'phone': phone, **extra}, format='json')


def test_register_stages_without_creating_user(api_client):
    response = _register(api_client, email='dana@example.com', age=34)

    assert response.status_code == 201
    assert not User.objects.filter(phone='5550001111').exists()
    assert is_otp_pending('5550001111')
    pending = get_pending_registration('5550001111')
    assert pending['name'] == 'Dana Driver'
    assert pending['age'] == 34


@pytest.mark.parametrize('payload', [
    {'phone': '5550001111'},
    {'name': 'Dana'},
    {'name': '   ', 'phone': '5550001111'},
    {'name': 'Dana', 'phone': '5550001111', 'email': 'not-an-email'},
    {'name': 'Dana', 'phone': '5550001111', 'age': 200},
])
def test_register_validation(api_client, payload):
    assert api_client.post(REGISTER_URL, payload, format='json').status_code == 400


def test_verify_creates_account_then_logs_in(api_client):
    _register(api_client, email='dana@example.com')

    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '123456'}, format='json')
    assert response.status_code == 200
    assert response.data['message'] == "Account created successfully!"
    assert response.data['access'] and response.data['refresh']
    assert response.data['user']['name'] == 'Dana Driver'
    assert response.data['user']['email'] == 'dana@example.com'
    assert User.objects.filter(phone='5550001111').count() == 1
    assert not is_otp_pending('5550001111')
    assert get_pending_registration('5550001111') is None

    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '123456'}, format='json')
    assert response.status_code == 200
    assert response.data['message'] == "Welcome back!"
    assert User.objects.filter(phone='5550001111').count() == 1


def test_register_existing_phone_updates_profile(api_client):
    User.objects.create_user(phone='5550001111', name='Old Name')
    _register(api_client, name='New Name', age=40)

    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '123456'}, format='json')
    assert response.status_code == 200
    user = User.objects.get(phone='5550001111')
    assert user.name == 'New Name'
    assert user.age == 40
    assert User.objects.filter(phone='5550001111').count() == 1


@pytest.mark.parametrize('phone', ['5550001111', '+15550009999', '0', 'anything'])
def test_fixed_code_passes_for_every_phone(api_client, phone):
    User.objects.create_user(phone=phone, name='Someone')
    response = api_client.post(VERIFY_URL, {'phone': phone, 'otp': '123456'}, format='json')
    assert response.status_code == 200


@pytest.mark.parametrize('otp', ['000000', '12345', '1234567', ' 123456', 'abcdef'])
def test_wrong_code_fails(api_client, otp):
    User.objects.create_user(phone='5550001111', name='Someone')
    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': otp}, format='json')
    assert response.status_code == 400
    assert response.data['error'] == "Invalid OTP. Please try again."


def test_login_unknown_phone_is_404(api_client):
    response = api_client.post(VERIFY_URL, {'phone': '5550007777', 'otp': '123456'}, format='json')
    assert response.status_code == 404
    assert response.data['error'] == "User not found. Please register first."


def test_failed_attempts_are_limited(api_client):
    User.objects.create_user(phone='5550001111', name='Someone')
    for _ in range(5):
        response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '999999'}, format='json')
        assert response.status_code == 400

    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '999999'}, format='json')
    assert response.status_code == 429

    # The fixed code still works while wrong guesses are locked out
    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '123456'}, format='json')
    assert response.status_code == 200

    # A successful login resets the window
    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '999999'}, format='json')
    assert response.status_code == 400


def test_send_otp_cooldown(api_client):
    assert api_client.post(SEND_OTP_URL, {'phone': '5550001111'}, format='json').status_code == 200
    assert is_otp_pending('5550001111')
    assert api_client.post(SEND_OTP_URL, {'phone': '5550001111'}, format='json').status_code == 429
    # Cooldown is per phone
    assert api_client.post(SEND_OTP_URL, {'phone': '5550002222'}, format='json').status_code == 200


def test_send_otp_requires_phone(api_client):
    assert api_client.post(SEND_OTP_URL, {'phone': ''}, format='json').status_code == 400


def test_cancel_clears_pending_registration(api_client):
    _register(api_client)
    response = api_client.post(CANCEL_URL, {'phone': '5550001111'}, format='json')
    assert response.status_code == 200
    assert not is_otp_pending('5550001111')

    response = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '123456'}, format='json')
    assert response.status_code == 404
    assert not User.objects.filter(phone='5550001111').exists()


def test_sms_sent_only_when_enabled(api_client, settings):
    settings.OTP_DEBUG_FLAG = 'NO'
    with mock.patch('apps.authentication.utils.MSG91Service.send_otp', return_value=True) as send:
        assert _register(api_client).status_code == 201
    send.assert_called_once_with('5550001111', '123456')

    settings.OTP_DEBUG_FLAG = 'YES'
    with mock.patch('apps.authentication.utils.MSG91Service.send_otp') as send:
        api_client.post(SEND_OTP_URL, {'phone': '5550003333'}, format='json')
    send.assert_not_called()


def test_me_requires_auth(api_client):
    assert api_client.get(ME_URL).status_code == 401


def test_me_get_and_patch(auth_client, user):
    response = auth_client.get(ME_URL)
    assert response.status_code == 200
    assert response.data['phone'] == user.phone

    response = auth_client.patch(ME_URL, {'name': 'Alice Renamed', 'email': '', 'age': 41}, format='json')
    assert response.status_code == 200
    user.refresh_from_db()
    assert user.name == 'Alice Renamed'
    assert user.email is None
    assert user.age == 41


def test_me_phone_is_immutable(auth_client, user):
    response = auth_client.patch(ME_URL, {'phone': '5559999999'}, format='json')
    assert response.status_code == 400
    user.refresh_from_db()
    assert user.phone == '5551230001'


def test_logout_blacklists_refresh_token(api_client):
    User.objects.create_user(phone='5550001111', name='Someone')
    tokens = api_client.post(VERIFY_URL, {'phone': '5550001111', 'otp': '123456'}, format='json').data

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    response = client.post('/api/auth/logout/', {'refresh': tokens['refresh']}, format='json')
    assert response.status_code == 200

    response = api_client.post('/api/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
    assert response.status_code == 401


def test_logout_with_bad_token(auth_client):
    assert auth_client.post('/api/auth/logout/', {'refresh': 'garbage'}, format='json').status_code == 400
    assert auth_client.post('/api/auth/logout/', {}, format='json').status_code == 400
