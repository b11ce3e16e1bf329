"""
Django settings for FeeDesk project.

Values that differ between deployments are read from the environment, with
development defaults.
"""
import os
from decimal import Decimal
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('FEEDESK_SECRET_KEY', 'django-insecure-feedesk-development-key')

DEBUG = os.environ.get('FEEDESK_DEBUG', 'True') == 'True'

ALLOWED_HOSTS = [h for h in os.environ.get('FEEDESK_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h]


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'authentication',
    'Students',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'FeeDesk.urls'

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

WSGI_APPLICATION = 'FeeDesk.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('FEEDESK_DB_PATH', BASE_DIR / 'db.sqlite3'),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
]


# Internationalization

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('FEEDESK_TIME_ZONE', 'Asia/Kolkata')
USE_I18N = True
USE_TZ = True


# Static and uploaded files

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

MEDIA_URL = '/media/'
MEDIA_ROOT = os.environ.get('FEEDESK_MEDIA_ROOT', BASE_DIR / 'media')


# Fees

# Used when a student record has no usable monthly fee
DEFAULT_MONTHLY_FEE = Decimal(os.environ.get('FEEDESK_DEFAULT_MONTHLY_FEE', '1200'))

# How far past the current month payments can be credited in advance
PAYABLE_MONTHS_AHEAD = int(os.environ.get('FEEDESK_PAYABLE_MONTHS_AHEAD', '24'))

CURRENCY_SYMBOL = os.environ.get('FEEDESK_CURRENCY_SYMBOL', 'Rs.')


# Logging

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'Students': {
            'handlers': ['console'],
            'level': os.environ.get('FEEDESK_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'authentication': {
            'handlers': ['console'],
            'level': os.environ.get('FEEDESK_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
