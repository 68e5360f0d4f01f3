import logging
import os
import time
import uuid

import boto3
from django.conf import settings
from django.core.cache import cache
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

BUCKET_READY_TIMEOUT = 3600


def get_s3_client():
    """Returns a boto3 S3 client using settings."""
    return boto3.client(
        's3',
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_S3_REGION_NAME,
        endpoint_url=settings.AWS_S3_ENDPOINT_URL,
    )


def _bucket_ready_key(bucket_name):
    return f"s3_bucket_ready:{bucket_name}"


def ensure_bucket(s3=None):
    """
    Creates the documents bucket if it does not exist yet.
    Returns True when the bucket was created.
    """
    s3 = s3 or get_s3_client()
    bucket_name = settings.AWS_STORAGE_BUCKET_NAME

    try:
        s3.head_bucket(Bucket=bucket_name)
        cache.set(_bucket_ready_key(bucket_name), True, timeout=BUCKET_READY_TIMEOUT)
        return False
    except ClientError as e:
        code = e.response.get('Error', {}).get('Code')
        if code not in ('404', 'NoSuchBucket', 'NotFound'):
            logger.error(f"Error checking S3 bucket {bucket_name}: {e}")
            return False
    except BotoCoreError as e:
        logger.error(f"Error checking S3 bucket {bucket_name}: {e}")
        return False

    logger.info(f"Bucket {bucket_name} not found, creating it")
    try:
        params = {'Bucket': bucket_name}
        if settings.AWS_S3_REGION_NAME and settings.AWS_S3_REGION_NAME != 'us-east-1':
            params['CreateBucketConfiguration'] = {'LocationConstraint': settings.AWS_S3_REGION_NAME}
        s3.create_bucket(**params)
        cache.set(_bucket_ready_key(bucket_name), True, timeout=BUCKET_READY_TIMEOUT)
        return True
    except ClientError as e:
        # Another request may have created it in the meantime
        logger.error(f"Could not create S3 bucket {bucket_name}: {e}")
        return False


def build_document_key(user_id, filename):
    """
    Per-user, collision resistant object key.
    Format: {user_id}/{epoch_millis}-{random}.{ext}
    """
    ext = os.path.splitext(filename)[1].lstrip('.').lower()
    key = f"{user_id}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}"
    return f"{key}.{ext}" if ext else key


def get_public_url(s3_key):
    base = settings.AWS_S3_PUBLIC_URL_BASE
    if base:
        return f"{base.rstrip('/')}/{s3_key}"
    bucket_name = settings.AWS_STORAGE_BUCKET_NAME
    return f"https://{bucket_name}.s3.{settings.AWS_S3_REGION_NAME}.amazonaws.com/{s3_key}"


def upload_document_file(user_id, file_obj, filename, content_type=None):
    """
    Uploads a document binary to the user's prefix.
    Returns a dict with file_url, s3_key and error (None on success).
    """
    if not user_id:
        logger.error("Missing user ID for file upload")
        return {'file_url': '', 's3_key': '', 'error': "Authentication required. Please log in."}

    s3 = get_s3_client()
    bucket_name = settings.AWS_STORAGE_BUCKET_NAME
    if not cache.get(_bucket_ready_key(bucket_name)):
        ensure_bucket(s3)
    key = build_document_key(user_id, filename)

    extra_args = {'CacheControl': 'max-age=3600'}
    if content_type:
        extra_args['ContentType'] = content_type

    try:
        s3.upload_fileobj(file_obj, bucket_name, key, ExtraArgs=extra_args)
        logger.info(f"Uploaded {filename} to {key}")
        return {'file_url': get_public_url(key), 's3_key': key, 'error': None}
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error uploading to S3: {e}")
        return {'file_url': '', 's3_key': '', 'error': f"Storage error: {e}"}


def generate_presigned_url_for_key(s3_key, expiration=3600):
    """Generates a presigned URL for an S3 object given its full key."""
    s3 = get_s3_client()
    bucket_name = settings.AWS_STORAGE_BUCKET_NAME
    try:
        response = s3.generate_presigned_url(
            'get_object',
            Params={'Bucket': bucket_name, 'Key': s3_key},
            ExpiresIn=expiration
        )
        return response
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error generating presigned URL for key {s3_key}: {e}")
        return None


def delete_s3_key(s3_key):
    """Deletes an S3 object given its full key."""
    s3 = get_s3_client()
    bucket_name = settings.AWS_STORAGE_BUCKET_NAME
    try:
        s3.delete_object(Bucket=bucket_name, Key=s3_key)
        logger.info(f"Deleted S3 object: {s3_key}")
        return True
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error deleting S3 key {s3_key}: {e}")
        return False
