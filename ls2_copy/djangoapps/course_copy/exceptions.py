"""
Exceptions raised by the course copy functions.

Every copy function lets these propagate unchanged to its caller; the web
service view turns them into error responses.
"""
from . import errors as UserErrors


class CourseCopyError(Exception):
    """Base exception class for course copy workflows."""

    error_code = 'coursecopyerror'

    def __init__(self, message=''):
        self.message = str(message)
        super().__init__(self.message)

    def get_context(self):
        """
        Extra, PII-free details to include in the serialized error.
        """
        return {}


class ValidationError(CourseCopyError):
    """
    Raised when a call argument is missing or malformed.
    """

    error_code = 'invalidparameter'

    def __init__(self, field, message):
        self.field = field
        super().__init__(UserErrors.INVALID_PARAMETER.format(field, message))

    def get_context(self):
        return {'field': self.field}


class NotFound(CourseCopyError):
    """
    Raised when a referenced record does not exist on the host.
    """

    error_code = 'invalidrecord'

    def __init__(self, kind, entity_id, message=None):
        self.kind = getattr(kind, 'value', kind)
        self.entity_id = entity_id
        super().__init__(message or UserErrors.RECORD_NOT_FOUND.format(self.kind, entity_id))

    def get_context(self):
        return {'kind': self.kind, 'id': self.entity_id}


class PermissionDenied(CourseCopyError):
    """
    Raised when the caller lacks a capability in a context.
    """

    error_code = 'nopermissions'

    def __init__(self, context, capability):
        self.context = context
        self.capability = capability
        super().__init__(UserErrors.NO_PERMISSION.format(capability, context))

    def get_context(self):
        return {'capability': self.capability, 'contextid': self.context.id}


class PrecheckFailed(CourseCopyError):
    """
    Raised when the restore precheck rejects an archive.
    """

    error_code = 'backupprecheckerrors'

    def __init__(self, result):
        self.errors = result.errors
        self.warnings = result.warnings
        super().__init__(UserErrors.PRECHECK_ERRORS.format(result.describe()))

    def get_context(self):
        return {'errors': list(self.errors), 'warnings': list(self.warnings)}


class InvariantViolation(CourseCopyError):
    """
    Raised when the host is not in a state that allows the operation.
    """

    error_code = 'invariantviolation'


class BlockNotAddable(InvariantViolation):
    """
    Raised when a block type is not in the course's addable set.
    """

    error_code = 'blocknotaddable'

    def __init__(self, block_name):
        self.block_name = block_name
        super().__init__(UserErrors.BLOCK_NOT_ADDABLE.format(block_name))

    def get_context(self):
        return {'blockname': self.block_name}
