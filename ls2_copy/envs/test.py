"""
Settings for running the course copy test suite.

The host platform and archive engine are the in-memory fakes from the
course_copy tests, and capabilities come from a test authentication backend.
"""

# We intentionally define lots of variables that aren't used, and
# want to import all variables from base settings files
# pylint: disable=wildcard-import, unused-wildcard-import

import tempfile

from .common import *

DEBUG = True

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'ATOMIC_REQUESTS': True,
    },
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

AUTHENTICATION_BACKENDS = [
    'django.contrib.auth.backends.ModelBackend',
    'ls2_copy.djangoapps.course_copy.tests.backends.CapabilityBackend',
]

COURSE_COPY_HOST_PLATFORM = 'ls2_copy.djangoapps.course_copy.tests.fakes.FakeHostPlatform'
COURSE_COPY_ARCHIVE_ENGINE = 'ls2_copy.djangoapps.course_copy.tests.fakes.FakeArchiveEngine'
COURSE_COPY_ARCHIVE_ENGINE_OPTIONS = {
    'temp_root': tempfile.gettempdir(),
}
KEEP_TEMP_DIRECTORIES_ON_BACKUP = False

LOGGING = get_logger_config(
    LOG_DIR,
    logging_env='test',
    debug=True,
    service_variant=SERVICE_VARIANT,
)
