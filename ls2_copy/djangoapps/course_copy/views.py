"""
Views exposing the course copy functions as a web service.
"""
import logging

from django.http import JsonResponse
from edx_django_utils.monitoring import set_custom_attribute
from edx_rest_framework_extensions.auth.jwt.authentication import JwtAuthentication
from edx_rest_framework_extensions.auth.session.authentication import (
    SessionAuthenticationAllowInactiveUser,
)
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ls2_copy import PLUGIN_VERSION, __version__

from . import errors as UserErrors
from .data import CallContext
from .exceptions import (
    CourseCopyError,
    InvariantViolation,
    NotFound,
    PermissionDenied,
    PrecheckFailed,
    ValidationError,
)
from .serializers import ErrorSerializer, SiteInfoSerializer, parameter_names, validate_parameters
from .services import available_functions, available_services, get_function, is_available, is_exposed

log = logging.getLogger(__name__)


class CourseCopyErrorResponse(Response):
    """An HTTP error response carrying the error code, message and context of a failure"""

    status = 500

    def __init__(self, error_code, message, context=None):
        content = ErrorSerializer({'errorcode': error_code, 'message': str(message)}, context=context).data
        super().__init__(content, status=self.status)

    @classmethod
    def from_exception(cls, exc):
        return cls(exc.error_code, exc.message, context=exc.get_context())


class InvalidParameterResponse(CourseCopyErrorResponse):
    """
    Error response for a missing, malformed or unexpected argument.
    Returns an HTTP 400 with error code.
    """

    status = 400


class NoPermissionResponse(CourseCopyErrorResponse):
    """
    Error response for a caller lacking a capability.
    Returns an HTTP 403 with error code and the capability checked.
    """

    status = 403


class NotFoundResponse(CourseCopyErrorResponse):
    """
    Error response for an unknown record or function.
    Returns an HTTP 404 with error code.
    """

    status = 404


class ConflictResponse(CourseCopyErrorResponse):
    """
    Error response for when the host state does not allow the operation.
    Returns an HTTP 409 with error code.
    """

    status = 409


class PrecheckFailedResponse(CourseCopyErrorResponse):
    """
    Error response for an archive the restore precheck rejected.
    Returns an HTTP 422 with error code, errors and warnings.
    """

    status = 422


ERROR_RESPONSES = (
    (ValidationError, InvalidParameterResponse),
    (PermissionDenied, NoPermissionResponse),
    (NotFound, NotFoundResponse),
    (PrecheckFailed, PrecheckFailedResponse),
    (InvariantViolation, ConflictResponse),
)


def error_response(exc):
    """
    Build the error response for a course copy exception.
    """
    for exception_class, response_class in ERROR_RESPONSES:
        if isinstance(exc, exception_class):
            return response_class.from_exception(exc)
    return CourseCopyErrorResponse.from_exception(exc)


def request_arguments(request):
    if hasattr(request.data, 'dict'):
        return request.data.dict()
    if not isinstance(request.data, dict):
        raise ValidationError('arguments', UserErrors.ARGUMENTS_NOT_NAMED)
    return dict(request.data)


class CourseCopyBaseView(APIView):
    """
    Base view for common auth/permission setup used across course copy views.
    """

    authentication_classes = (
        JwtAuthentication,
        TokenAuthentication,
        SessionAuthenticationAllowInactiveUser,
    )

    permission_classes = (IsAuthenticated,)


class ExternalFunctionView(CourseCopyBaseView):
    """
    POST a call to a registered function

    Request: the function arguments, by name

    Response: the function result, or null

    Errors:
    - NotFoundResponse (HTTP 404) for unknown functions and records
    - InvalidParameterResponse (HTTP 400) for bad arguments
    - NoPermissionResponse (HTTP 403) for missing capabilities and users the service does not admit
    - PrecheckFailedResponse (HTTP 422) for archives that fail the restore precheck
    - ConflictResponse (HTTP 409) for host state that does not allow the operation
    """

    def post(self, request, function_name):
        function = get_function(function_name)
        if function is None or not is_exposed(function):
            log.warning('Call to unknown function %s by user %s', function_name, request.user.id)
            return NotFoundResponse(
                'unknownfunction', UserErrors.UNKNOWN_FUNCTION.format(function_name), {'function': function_name},
            )
        if not is_available(function, request.user):
            log.warning('User %s is not authorized for function %s', request.user.id, function_name)
            return NoPermissionResponse(
                'accessexception', UserErrors.SERVICE_ACCESS_DENIED.format(function_name), {'function': function_name},
            )

        set_custom_attribute('course_copy_function', function.name)
        try:
            arguments = request_arguments(request)
            expected = parameter_names(function.parameters)
            unexpected = sorted(name for name in arguments if name not in expected)
            if unexpected:
                raise ValidationError(unexpected[0], UserErrors.UNEXPECTED_PARAMETER.format(unexpected[0]))
            params = validate_parameters(function.parameters, arguments)

            result = function.handler(CallContext.for_user(request.user), **params)
        except CourseCopyError as exc:
            log.info('%s failed for user %s: %s', function.name, request.user.id, exc.error_code)
            set_custom_attribute('course_copy_error_code', exc.error_code)
            return error_response(exc)

        if function.returns is None:
            return JsonResponse(None, safe=False)
        return Response(function.returns(result).data)


class ServiceInfoView(CourseCopyBaseView):
    """
    GET what the calling user can reach through this plugin

    Response: {
        username
        userid
        release
        version
        services
        functions
    }
    """

    def get(self, request):
        info = {
            'username': request.user.username,
            'userid': request.user.id,
            'release': __version__,
            'version': PLUGIN_VERSION,
            'services': available_services(request.user),
            'functions': available_functions(request.user),
        }
        return Response(SiteInfoSerializer(info).data)
