import boto3
import pytest
from django.conf import settings
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from moto import mock_aws
from rest_framework.test import APIClient

from apps.authentication.models import User
from apps.documents.models import Document


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def s3():
    """Mocked S3 with the documents bucket already in place."""
    with mock_aws():
        client = boto3.client('s3', region_name=settings.AWS_S3_REGION_NAME)
        client.create_bucket(Bucket=settings.AWS_STORAGE_BUCKET_NAME)
        yield client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(phone='5551230001', name='Alice Owner', email='alice@example.com')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(phone='5551230002', name='Bob Recipient')


@pytest.fixture
def third_user(db):
    return User.objects.create_user(phone='5551230003', name='Carol Outsider')


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def third_client(third_user):
    client = APIClient()
    client.force_authenticate(user=third_user)
    return client


@pytest.fixture
def make_file():
    def _make(name='health_policy.pdf', size=1024, content_type='application/pdf'):
        return SimpleUploadedFile(name, b'x' * size, content_type=content_type)
    return _make


@pytest.fixture
def document(user):
    return Document.objects.create(
        owner=user,
        name='Auto Insurance',
        type='Auto',
        provider='Geico',
        policy_number='A-12345678',
        premium_amount='$125/month',
        s3_key=f'{user.id}/1700000000000-abcdef1234.pdf',
        file_url='https://documents.s3.us-east-1.amazonaws.com/x.pdf',
        file_type='application/pdf',
        file_size=1024,
    )
