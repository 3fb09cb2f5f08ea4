"""
Django settings for country_gdp project.

Values are read from the environment; a local ``.env`` file is loaded first
when present (see ``.env.example``).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-country-gdp-dev-key')

DEBUG = env_bool('DEBUG', False)

ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h.strip()]


INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'countries',
]

MIDDLEWARE = [
    'countries.middleware.RequestLogMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'country_gdp.urls'

WSGI_APPLICATION = 'country_gdp.wsgi.application'

APPEND_SLASH = False


# Database
# sqlite unless DB_ENGINE points at a server backend (e.g. django.db.backends.mysql)

DB_ENGINE = os.getenv('DB_ENGINE', 'django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': os.getenv('DB_NAME', str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': os.getenv('DB_NAME', 'country_gdp'),
            'USER': os.getenv('DB_USER', ''),
            'PASSWORD': os.getenv('DB_PASSWORD', ''),
            'HOST': os.getenv('DB_HOST', '127.0.0.1'),
            'PORT': os.getenv('DB_PORT', ''),
            'CONN_MAX_AGE': int(os.getenv('DB_CONN_MAX_AGE', '60')),
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = False

USE_TZ = True


REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'countries.exceptions.api_exception_handler',
}


# External data sources

COUNTRIES_API_URL = os.getenv(
    'COUNTRIES_API_URL',
    'https://restcountries.com/v2/all?fields=name,capital,region,population,flag,currencies',
)
EXCHANGE_RATE_API_URL = os.getenv('EXCHANGE_RATE_API_URL', 'https://open.er-api.com/v6/latest/USD')
EXTERNAL_API_TIMEOUT = float(os.getenv('EXTERNAL_API_TIMEOUT', '10'))


# Summary image, written by whatever listens to countries.signals.refresh_completed

CACHE_DIR = Path(os.getenv('CACHE_DIR', BASE_DIR / 'cache'))
SUMMARY_IMAGE_PATH = Path(os.getenv('SUMMARY_IMAGE_PATH', CACHE_DIR / 'summary.png'))


LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'default',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'urllib3': {'level': 'WARNING'},
        'django.request': {'level': 'ERROR'},
    },
}
