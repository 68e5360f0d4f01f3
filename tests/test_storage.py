import io
import re
from unittest import mock

import boto3
import pytest
from moto import mock_aws

from apps.documents import s3_utils


def test_build_document_key():
    key = s3_utils.build_document_key('user-1', 'My Policy.PDF')
    assert re.fullmatch(r'user-1/\d{13}-[0-9a-f]{10}\.pdf', key)
    assert key != s3_utils.build_document_key('user-1', 'My Policy.PDF')


def test_public_url(settings):
    settings.AWS_S3_PUBLIC_URL_BASE = 'https://cdn.example.com/documents/'
    assert s3_utils.get_public_url('u/1.pdf') == 'https://cdn.example.com/documents/u/1.pdf'

    settings.AWS_S3_PUBLIC_URL_BASE = ''
    assert s3_utils.get_public_url('u/1.pdf') == 'https://documents.s3.us-east-1.amazonaws.com/u/1.pdf'


def test_upload_and_delete(s3, settings):
    result = s3_utils.upload_document_file('user-1', io.BytesIO(b'%PDF-1.4'), 'auto.pdf', 'application/pdf')
    assert result['error'] is None
    assert result['s3_key'].startswith('user-1/')
    assert result['file_url'].endswith(result['s3_key'])

    body = s3.get_object(Bucket=settings.AWS_STORAGE_BUCKET_NAME, Key=result['s3_key'])['Body'].read()
    assert body == b'%PDF-1.4'

    assert s3_utils.generate_presigned_url_for_key(result['s3_key'])

    assert s3_utils.delete_s3_key(result['s3_key']) is True
    listing = s3.list_objects_v2(Bucket=settings.AWS_STORAGE_BUCKET_NAME)
    assert listing.get('KeyCount', 0) == 0


def test_upload_requires_user():
    result = s3_utils.upload_document_file('', io.BytesIO(b'data'), 'auto.pdf')
    assert result['error']
    assert result['s3_key'] == ''


@pytest.mark.parametrize('region', ['us-east-1', 'eu-west-1'])
def test_bucket_created_lazily(settings, region):
    settings.AWS_S3_REGION_NAME = region
    with mock_aws():
        client = boto3.client('s3', region_name=region)
        assert s3_utils.ensure_bucket(client) is True
        assert s3_utils.ensure_bucket(client) is False

        result = s3_utils.upload_document_file('user-2', io.BytesIO(b'png'), 'home.png')
        assert result['error'] is None
        names = [b['Name'] for b in client.list_buckets()['Buckets']]
        assert settings.AWS_STORAGE_BUCKET_NAME in names


def test_bucket_checked_once_across_uploads(s3):
    with mock.patch('apps.documents.s3_utils.ensure_bucket', wraps=s3_utils.ensure_bucket) as ensure:
        for name in ('auto.pdf', 'home.pdf', 'life.pdf'):
            assert s3_utils.upload_document_file('user-3', io.BytesIO(b'data'), name)['error'] is None
    assert ensure.call_count == 1
