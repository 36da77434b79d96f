#!/usr/bin/env python
"""
Django administration utility.

Standard idiomatic Django usage:

    DJANGO_SETTINGS_MODULE=ls2_copy.envs.production ./manage.py COMMAND ARGS...

The settings module defaults to ls2_copy.envs.common.
"""
# pylint: disable=wrong-import-order, wrong-import-position

import os
import sys


def main():
    """
    Call the management command.
    """
    final_settings_module = os.environ.get("DJANGO_SETTINGS_MODULE") or "ls2_copy.envs.common"

    # The rest of this is just standard Django boilerplate.
    try:
        from django.core.management import execute_from_command_line
    except ImportError:
        # The above import may fail for some other reason. Ensure that the
        # issue is really that Django is missing to avoid masking other exceptions.
        try:
            import django  # pylint: disable=unused-import, wrong-import-position
        except ImportError as import_error:
            raise ImportError(
                "Couldn't import Django. Are you sure it's installed and "
                "available on your PYTHONPATH environment variable? Did you "
                "forget to activate a virtual environment?"
            ) from import_error
        raise

    print(
        f"{sys.argv[0]}: Effective DJANGO_SETTINGS_MODULE == \"{final_settings_module}\"",
        file=sys.stderr
    )
    os.environ["DJANGO_SETTINGS_MODULE"] = final_settings_module
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
