"""
Override common.py with key-value pairs from YAML (plus some extra defaults & post-processing).
"""

# We intentionally define lots of variables that aren't used, and
# want to import all variables from base settings files
# pylint: disable=wildcard-import, unused-wildcard-import


import codecs
import os

import yaml
from django.core.exceptions import ImproperlyConfigured

from .common import *

from ls2_copy.logsettings import get_logger_config  # lint-amnesty, pylint: disable=wrong-import-order


def get_env_setting(setting):
    """ Get the environment setting or return exception """
    try:
        return os.environ[setting]
    except KeyError:
        error_msg = "Set the %s env variable" % setting
        raise ImproperlyConfigured(error_msg)  # lint-amnesty, pylint: disable=raise-missing-from


#######################################################################################################################
#### PRODUCTION DEFAULTS
####

DEBUG = False

# IMPORTANT: With this enabled, the server must always be behind a proxy that strips the header HTTP_X_FORWARDED_PROTO
# from client requests. Otherwise, a user can fool our server into thinking it was an https connection.
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

SESSION_COOKIE_HTTPONLY = True
SYSLOG_SERVER = ''
LOCAL_LOGLEVEL = 'INFO'


#######################################################################################################################
#### YAML LOADING
####

# A file path to a YAML file from which to load configuration overrides.
CONFIG_FILE = get_env_setting('LS2_COPY_CFG')

with codecs.open(CONFIG_FILE, encoding='utf-8') as f:

    # _YAML_TOKENS starts out with the exact contents of the LS2_COPY_CFG YAML file.
    _YAML_TOKENS = yaml.safe_load(f) or {}

    # Define/update a Django setting for every YAML key-value pair, except the
    # special keys handled below, which update the defaults instead of replacing them.
    vars().update({
        key: value
        for key, value in _YAML_TOKENS.items()
        if key not in [
            'COURSE_COPY_ARCHIVE_ENGINE_OPTIONS',
            'JWT_AUTH',
            'REST_FRAMEWORK',
        ]
    })


#######################################################################################################################
#### POST-PROCESSING OF YAML
####

COURSE_COPY_ARCHIVE_ENGINE_OPTIONS.update(_YAML_TOKENS.get('COURSE_COPY_ARCHIVE_ENGINE_OPTIONS', {}))
JWT_AUTH.update(_YAML_TOKENS.get('JWT_AUTH', {}))
REST_FRAMEWORK.update(_YAML_TOKENS.get('REST_FRAMEWORK', {}))

# Additional installed apps, such as the one providing the host platform
for app in _YAML_TOKENS.get('ADDL_INSTALLED_APPS', []):
    INSTALLED_APPS.append(app)

for backend in _YAML_TOKENS.get('ADDL_AUTHENTICATION_BACKENDS', []):
    AUTHENTICATION_BACKENDS.append(backend)

for required in ('COURSE_COPY_HOST_PLATFORM', 'COURSE_COPY_ARCHIVE_ENGINE'):
    if not vars().get(required):
        raise ImproperlyConfigured(f'{required} must be set in {CONFIG_FILE}')

LOGGING = get_logger_config(
    LOG_DIR,
    logging_env=LOGGING_ENV,
    syslog_addr=(SYSLOG_SERVER, 514) if SYSLOG_SERVER else None,
    local_loglevel=LOCAL_LOGLEVEL,
    service_variant=SERVICE_VARIANT,
)
