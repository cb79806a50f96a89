"""
Settings for the test suite.

Runs without a .env file: in-memory SQLite, local memory cache and a
placeholder webhook that tests patch out.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')

from .settings import *  # noqa: E402,F401,F403

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
        'LOCATION': 'contact-tests',
    }
}

SECURE_SSL_REDIRECT = False

CONTACT_WEBHOOK_URL = 'https://hooks.example.com/contact'
CONTACT_DEFAULT_LANGUAGE = 'ru'
CONTACT_MESSAGE_MAX_LENGTH = 500
CONTACT_REQUIRE_CONSENT = True
CONTACT_REQUIRE_CONTACT_METHOD = True
CONTACT_RATE_LIMIT_MAX_SUBMISSIONS = 5
CONTACT_RATE_LIMIT_WINDOW_SECONDS = 600
CONTACT_TRUSTED_PROXY_COUNT = 0
