"""
Capability checks for the course copy functions.

Capabilities are checked with ``user.has_perm(capability, context)``, so the
host's access-control policy is plugged in through Django's
AUTHENTICATION_BACKENDS. A backend receives the capability name and the
``ContextNode`` it is checked against.
"""
import logging

from .exceptions import PermissionDenied

log = logging.getLogger(__name__)

BACKUP_TARGET_IMPORT = 'moodle/backup:backuptargetimport'
RESTORE_TARGET_IMPORT = 'moodle/restore:restoretargetimport'
MANAGE_BLOCKS = 'moodle/site:manageblocks'


def has_capability(user, context, capability):
    return bool(user is not None and user.has_perm(capability, context))


def require_capability(user, context, capability):
    """
    Raise PermissionDenied unless ``user`` holds ``capability`` in ``context``.
    """
    if not has_capability(user, context, capability):
        log.warning(
            'Authorization failed: user %s lacks %s in %s',
            getattr(user, 'pk', None), capability, context,
        )
        raise PermissionDenied(context, capability)
