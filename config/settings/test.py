"""
Django test settings for devtracker project.

Usage:
    pytest
    python manage.py test --settings=config.settings.test
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Fast hashing for admin-password fixtures
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

SITE_URL = 'http://testserver'

# Tests switch to closed mode with override_settings
CRON_SECRET = ''

REMINDER_MIDDAY_HOUR = 12
REMINDER_EOD_HOUR = 18
TIME_ZONE = 'UTC'
DEFAULT_USER_TIMEZONE = 'UTC'

Q_CLUSTER = {
    'name': 'devtracker_test',
    'sync': True,
    'orm': 'default',
    'timeout': 60,
    'retry': 120,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
