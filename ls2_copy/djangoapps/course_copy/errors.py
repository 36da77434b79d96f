"""
User facing error messages for the course copy functions.
"""
from django.utils.translation import gettext_lazy as _

ARGUMENTS_NOT_NAMED = _('Arguments must be sent as an object of named values.')
BLOCK_NOT_ADDABLE = _('The block "{0}" cannot be added to this course.')
INVALID_COURSE_ID = _('Section {0} does not belong to course {1}.')
INVALID_PARAMETER = _('Invalid parameter value detected for "{0}": {1}')
MISSING_NEW_ENTITY = _('The restore did not report the new {0}.')
NO_COURSE_CONTEXT = _('Could not find the course containing {0}.')
NO_PERMISSION = _('Sorry, but you do not currently have permissions to do that ({0}) in {1}.')
PRECHECK_ERRORS = _('Errors found while checking the backup before restoring it: {0}')
RECORD_NOT_FOUND = _('Can not find {0} with id {1}.')
SERVICE_ACCESS_DENIED = _('Access to the function "{0}" is not allowed for this user.')
UNEXPECTED_PARAMETER = _('Unexpected parameter "{0}".')
UNKNOWN_FUNCTION = _('Unknown web service function "{0}".')
