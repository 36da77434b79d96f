"""
Parameter and result descriptions for the course copy functions.
"""
# pylint: disable=abstract-method

from rest_framework import serializers

from .exceptions import ValidationError

BLOCK_NAME_PATTERN = r'^[A-Za-z0-9_]+$'
BLOCK_REGION_PATTERN = r'^[A-Za-z0-9_-]+$'


class CopySectionParametersSerializer(serializers.Serializer):
    from_section_id = serializers.IntegerField(help_text='The id of the section we are importing from')
    to_course_id = serializers.IntegerField(help_text='The id of the course we are importing to')
    to_new_section = serializers.BooleanField(help_text='If true, create a new section in the target course')
    to_section_number = serializers.IntegerField(
        required=False, allow_null=True, min_value=0,
        help_text='The section number we are importing to',
    )


class CopyActivityParametersSerializer(serializers.Serializer):
    from_activity_id = serializers.IntegerField(help_text='The id of the activity we are importing from')
    to_course_id = serializers.IntegerField(help_text='The id of the course we are importing to')
    to_section_id = serializers.IntegerField(
        required=False, allow_null=True, help_text='The id of the section we are importing to',
    )
    to_before_module_id = serializers.IntegerField(
        required=False, allow_null=True, help_text='The id of the module we are importing before',
    )


class CopyBlockParametersSerializer(serializers.Serializer):
    from_block_id = serializers.IntegerField(help_text='The id of the block we are importing from')
    to_course_id = serializers.IntegerField(help_text='The id of the course we are importing to')


class CopyFiltersParametersSerializer(serializers.Serializer):
    from_course_id = serializers.IntegerField(help_text='The id of the course we are importing from')
    to_course_id = serializers.IntegerField(help_text='The id of the course we are importing to')


class AddBlockParametersSerializer(serializers.Serializer):
    course_id = serializers.IntegerField(help_text='The id of the course')
    block_name = serializers.RegexField(BLOCK_NAME_PATTERN, max_length=40, help_text='Name of the block to add')
    block_region = serializers.RegexField(
        BLOCK_REGION_PATTERN, max_length=64, required=False, allow_null=True,
        help_text='If defined add the new block to the specified region',
    )


class NewSectionSerializer(serializers.Serializer):
    new_section_id = serializers.IntegerField(help_text='The id of the section we are importing to')


class NewActivitySerializer(serializers.Serializer):
    new_activity_id = serializers.IntegerField(help_text='The id of the activity we are importing to')


class NewBlockSerializer(serializers.Serializer):
    new_block_id = serializers.IntegerField(help_text='The id of the block we are importing to')


def validate_parameters(serializer_class, arguments):
    """
    Validate raw call arguments against a parameters serializer.

    Returns the normalized arguments, or raises ValidationError naming the
    first offending field.
    """
    serializer = serializer_class(data=arguments)
    if serializer.is_valid():
        return dict(serializer.validated_data)

    field_name, messages = next(iter(serializer.errors.items()))
    message = messages[0] if isinstance(messages, list) and messages else messages
    raise ValidationError(field_name, message)


def parameter_names(serializer_class):
    return list(serializer_class().fields)


class ErrorSerializer(serializers.Serializer):
    """Returns error code and message, and unpacks additional context alongside them"""

    errorcode = serializers.CharField()
    message = serializers.CharField(allow_blank=True)

    def to_representation(self, instance):
        output = super().to_representation(instance)

        if self.context:
            for key, value in self.context.items():
                output.setdefault(key, value)

        return output


class FunctionInfoSerializer(serializers.Serializer):
    name = serializers.CharField()
    description = serializers.CharField()
    access_type = serializers.CharField(source='access_type.value')
    capabilities = serializers.ListField(child=serializers.CharField())
    parameters = serializers.SerializerMethodField()

    def get_parameters(self, function):
        return parameter_names(function.parameters)


class SiteInfoSerializer(serializers.Serializer):
    """
    What a caller can do with this plugin.
    """
    username = serializers.CharField()
    userid = serializers.IntegerField()
    release = serializers.CharField()
    version = serializers.IntegerField()
    services = serializers.ListField(child=serializers.CharField())
    functions = FunctionInfoSerializer(many=True)
