"""
WSGI config for the LS2 course copy service.

This module contains the WSGI application used by Django's development server
and any production WSGI deployments.
It exposes a module-level variable named ``application``. Django's
``runserver`` command discovers this application via the
``WSGI_APPLICATION`` setting.
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ls2_copy.envs.production")

# This application object is used by the development server
# as well as any WSGI server configured to use this file.
from django.core.wsgi import get_wsgi_application  # lint-amnesty, pylint: disable=wrong-import-position
application = get_wsgi_application()
