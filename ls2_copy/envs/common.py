"""
This is the common settings file, intended to set sane defaults for the LS2
course copy service. Environment specific settings modules import everything
from here and override what they need.
"""

# We intentionally define lots of variables that aren't used, and
# want to import all variables from base settings files
# pylint: disable=unused-import, useless-suppression, wrong-import-order, wrong-import-position

import os

from path import Path as path

from ls2_copy.logsettings import get_logger_config

############################# SET PATH INFORMATION #############################
PROJECT_ROOT = path(os.path.abspath(__file__)).parent.parent  # /ls2-copy/ls2_copy
REPO_ROOT = PROJECT_ROOT.parent
ENV_ROOT = REPO_ROOT.parent  # virtualenv dir /ls2-copy is in

DATA_DIR = ENV_ROOT / "data"
LOG_DIR = '/edx/var/log/edx'
LOGGING_ENV = 'sandbox'
SERVICE_VARIANT = os.environ.get('SERVICE_VARIANT', 'ls2_copy')

DEBUG = False
SECRET_KEY = 'dev key'
ALLOWED_HOSTS = ['*']
ROOT_URLCONF = 'ls2_copy.urls'
WSGI_APPLICATION = 'ls2_copy.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': DATA_DIR / 'ls2_copy.db',
        'ATOMIC_REQUESTS': True,
    },
}
DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

USE_TZ = True
TIME_ZONE = 'UTC'
LANGUAGE_CODE = 'en'
USE_I18N = True

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'rest_framework',
    'rest_framework.authtoken',
    'ls2_copy.djangoapps.course_copy.apps.CourseCopyConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
]

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# The host's access-control policy answers ``user.has_perm(capability, context)``
# for the course copy capabilities; list its backend here.
AUTHENTICATION_BACKENDS = [
    'django.contrib.auth.backends.ModelBackend',
]

REST_FRAMEWORK = {
    'DEFAULT_PAGINATION_CLASS': None,
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'EXCEPTION_HANDLER': 'rest_framework.views.exception_handler',
    'NUM_PROXIES': 0,
}

JWT_AUTH = {
    'JWT_VERIFY_EXPIRATION': True,
    'JWT_PAYLOAD_GET_USERNAME_HANDLER': lambda d: d.get('username'),
    'JWT_LEEWAY': 1,
    'JWT_AUTH_HEADER_PREFIX': 'JWT',
    'JWT_ISSUER': 'http://127.0.0.1:8000/oauth2',
    'JWT_AUDIENCE': 'change-me',
    'JWT_SECRET_KEY': SECRET_KEY,
    'JWT_ALGORITHM': 'HS256',
}

############################# COURSE COPY ######################################

# .. setting_name: COURSE_COPY_HOST_PLATFORM
# .. setting_default: None
# .. setting_description: Dotted path of the HostPlatform subclass through which the course copy
#   functions look up courses, sections, activities, blocks and permission contexts.
#   Copy calls fail with ImproperlyConfigured while this is unset.
COURSE_COPY_HOST_PLATFORM = None

# .. setting_name: COURSE_COPY_ARCHIVE_ENGINE
# .. setting_default: None
# .. setting_description: Dotted path of the ArchiveEngine subclass that exports entities to
#   archives and restores them into courses.
COURSE_COPY_ARCHIVE_ENGINE = None

# .. setting_name: COURSE_COPY_ARCHIVE_ENGINE_OPTIONS
# .. setting_default: {}
# .. setting_description: Keyword arguments passed to the archive engine class when it is built.
COURSE_COPY_ARCHIVE_ENGINE_OPTIONS = {}

# .. toggle_name: KEEP_TEMP_DIRECTORIES_ON_BACKUP
# .. toggle_implementation: DjangoSetting
# .. toggle_default: False
# .. toggle_description: When True, archives written while copying content are left in temporary
#   storage after the call ends instead of being deleted. Useful when debugging a failing restore.
# .. toggle_use_cases: open_edx
# .. toggle_creation_date: 2025-04-09
KEEP_TEMP_DIRECTORIES_ON_BACKUP = False

############################# LOGGING ##########################################

LOGGING = get_logger_config(
    LOG_DIR,
    logging_env=LOGGING_ENV,
    dev_env=True,
    debug=True,
    service_variant=SERVICE_VARIANT,
)
