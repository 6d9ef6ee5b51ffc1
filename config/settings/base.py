"""
Django base settings for devtracker project.
Shared settings between development, production and test.
"""

from pathlib import Path
from decouple import config, Csv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='django-insecure-change-me-in-production')

# Application definition
DJANGO_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

THIRD_PARTY_APPS = [
    'django_filters',
    'django_q',
]

LOCAL_APPS = [
    'apps.accounts',
    'apps.activities',
    'apps.notifications',
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'apps.accounts.middleware.ForwardedEmailMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# =============================================================================
# AUTHENTICATION - CRITICAL: Custom User Model
# =============================================================================
# Must be set BEFORE first migration
AUTH_USER_MODEL = 'accounts.User'

# The identity provider sits in front of the app (authenticating proxy) and
# asserts the verified email in this header. Only pre-provisioned users get in.
REMOTE_USER_EMAIL_HEADER = config('REMOTE_USER_EMAIL_HEADER', default='HTTP_X_FORWARDED_EMAIL')
REMOTE_USER_NAME_HEADER = config('REMOTE_USER_NAME_HEADER', default='HTTP_X_FORWARDED_NAME')

AUTHENTICATION_BACKENDS = [
    'apps.accounts.backends.ProvisionedUserBackend',
    'django.contrib.auth.backends.ModelBackend',  # Django admin passwords
]

LOGIN_URL = 'admin:login'


# =============================================================================
# PASSWORD VALIDATION (Django admin accounts only)
# =============================================================================
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {
            'min_length': 12,
        }
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# Password hashing - use Argon2 as primary
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.Argon2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher',
]


# =============================================================================
# INTERNATIONALIZATION & TIMEZONE
# =============================================================================
LANGUAGE_CODE = 'en-us'

# Server-side zone for admin views and exports. Reminders use each user's zone.
TIME_ZONE = config('TIME_ZONE', default='UTC')

USE_I18N = True

USE_TZ = True

# Zone assigned to newly provisioned users
DEFAULT_USER_TIMEZONE = config('DEFAULT_USER_TIMEZONE', default='UTC')


# =============================================================================
# STATIC FILES
# =============================================================================
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# =============================================================================
# EMAIL SETTINGS
# =============================================================================
# Production points the SMTP backend at the transactional email provider's relay.
EMAIL_BACKEND = config(
    'EMAIL_BACKEND',
    default='django.core.mail.backends.console.EmailBackend'
)
EMAIL_HOST = config('EMAIL_HOST', default='localhost')
EMAIL_PORT = config('EMAIL_PORT', default=587, cast=int)
EMAIL_USE_TLS = config('EMAIL_USE_TLS', default=True, cast=bool)
EMAIL_HOST_USER = config('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = config('EMAIL_HOST_PASSWORD', default='')
# Seconds allowed per SMTP call during a reminder run
EMAIL_TIMEOUT = config('EMAIL_TIMEOUT', default=10, cast=int)

DEFAULT_FROM_EMAIL = config('DEFAULT_FROM_EMAIL', default='noreply@devtracker.com')

# Site URL for email links
SITE_URL = config('SITE_URL', default='http://localhost:8000')


# =============================================================================
# REMINDERS
# =============================================================================
# Bearer token expected by the cron endpoint. Empty means open mode (local dev).
CRON_SECRET = config('CRON_SECRET', default='')

# A reminder is due during the hour before its threshold (local time).
REMINDER_MIDDAY_HOUR = config('REMINDER_MIDDAY_HOUR', default=12, cast=int)
REMINDER_EOD_HOUR = config('REMINDER_EOD_HOUR', default=18, cast=int)

REMINDER_SUBMISSION_PATH = config('REMINDER_SUBMISSION_PATH', default='/dashboard')


# =============================================================================
# ACTIVITY API
# =============================================================================
ACTIVITY_DEFAULT_DAYS = 7
ACTIVITY_DEFAULT_LIMIT = 10
ADMIN_ACTIVITY_DEFAULT_DAYS = 30
ADMIN_ACTIVITY_PAGE_SIZE = 100
ACTIVITY_MAX_DAYS = 365
ACTIVITY_MAX_LIMIT = 100

# Suggested meeting types (free text is still accepted)
MEETING_TYPES = config(
    'MEETING_TYPES',
    default='Daily Standup,Code Review,Planning,Dev Meeting,12pm Updates,Stand-up,EOD Update',
    cast=Csv(),
)


# =============================================================================
# DJANGO-Q2 SETTINGS (Background Tasks)
# =============================================================================
Q_CLUSTER = {
    'name': 'devtracker',
    'workers': 2,
    'recycle': 500,
    'timeout': 600,
    'retry': 900,
    'compress': True,
    'save_limit': 250,
    'queue_limit': 500,
    'cpu_affinity': 1,
    'label': 'Django Q2',
    'orm': 'default',
}


# =============================================================================
# DEFAULT PRIMARY KEY FIELD TYPE
# =============================================================================
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
