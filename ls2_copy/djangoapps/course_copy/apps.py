# lint-amnesty, pylint: disable=missing-module-docstring
from django.apps import AppConfig


class CourseCopyConfig(AppConfig):
    """
    Application Configuration for course_copy.
    """
    name = 'ls2_copy.djangoapps.course_copy'
    label = 'course_copy'
    verbose_name = 'LS2 course copy'
