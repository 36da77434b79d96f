""" Management command to run a course copy web service function as a given user """
import json
import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from ls2_copy.djangoapps.course_copy.data import CallContext
from ls2_copy.djangoapps.course_copy.exceptions import CourseCopyError
from ls2_copy.djangoapps.course_copy.serializers import parameter_names, validate_parameters
from ls2_copy.djangoapps.course_copy.services import get_function, is_available, is_exposed

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    """
    Run a registered course copy function and print its JSON result.

    Example:
        ./manage.py run_copy_function --username staff local_ls2_copy_section \\
            from_section_id=12 to_course_id=4 to_new_section=true
    """
    help = 'Runs a course copy web service function as the given user.'

    def add_arguments(self, parser):
        parser.add_argument('function_name', help='Name of the web service function, e.g. local_ls2_copy_block')
        parser.add_argument('--username', required=True, help='User the function runs as')
        parser.add_argument('arguments', nargs='*', metavar='key=value', help='Function arguments')

    def handle(self, *args, **options):
        function = get_function(options['function_name'])
        if function is None or not is_exposed(function):
            raise CommandError(f"Unknown web service function {options['function_name']}")

        try:
            user = User.objects.get(username=options['username'])
        except User.DoesNotExist as exc:
            raise CommandError(f"No user found with username {options['username']}") from exc
        if not is_available(function, user):
            raise CommandError(f"User {user.username} is not authorized for {function.name}")

        arguments = {}
        for argument in options['arguments']:
            key, separator, value = argument.partition('=')
            if not separator or not key:
                raise CommandError(f'Arguments must look like key=value, got {argument}')
            if key not in parameter_names(function.parameters):
                raise CommandError(f"Unexpected argument {key} for {function.name}")
            arguments[key] = value

        try:
            params = validate_parameters(function.parameters, arguments)
            result = function.handler(CallContext.for_user(user), **params)
        except CourseCopyError as exc:
            raise CommandError(f'{exc.error_code}: {exc.message}') from exc

        if function.returns is not None:
            result = function.returns(result).data
        logger.info('%s run by %s from the command line', function.name, user.username)
        self.stdout.write(json.dumps(result))
