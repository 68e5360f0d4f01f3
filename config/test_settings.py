from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

# moto intercepts every call, the credentials only need to exist
AWS_ACCESS_KEY_ID = 'testing'
AWS_SECRET_ACCESS_KEY = 'testing'
AWS_STORAGE_BUCKET_NAME = 'documents'
AWS_S3_REGION_NAME = 'us-east-1'
AWS_S3_ENDPOINT_URL = None
AWS_S3_PUBLIC_URL_BASE = ''

OTP_FIXED_CODE = '123456'
OTP_DEBUG_FLAG = 'YES'
