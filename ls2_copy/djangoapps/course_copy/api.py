"""
Python API for copying course content between courses.

Each function validates its arguments, resolves the records involved, checks
capabilities and then hands the copy to a ``DuplicationPipeline``. All of them
take an explicit ``CallContext`` naming the caller and the host backends.
"""
import logging

from . import errors as UserErrors
from .data import CallContext, ContextLevel
from .exceptions import BlockNotAddable, ValidationError
from .permissions import MANAGE_BLOCKS, require_capability
from .pipeline import (
    ACTIVITY_COPY,
    BLOCK_COPY,
    FILTERS_COPY,
    SECTION_COPY,
    DuplicationPipeline,
)
from .serializers import (
    AddBlockParametersSerializer,
    CopyActivityParametersSerializer,
    CopyBlockParametersSerializer,
    CopyFiltersParametersSerializer,
    CopySectionParametersSerializer,
    validate_parameters,
)

log = logging.getLogger(__name__)


def copy_section(
    call_context: CallContext, from_section_id, to_course_id, to_new_section, to_section_number=None,
):
    """
    Copy a section, without its activities, into another course.

    With ``to_new_section`` the copy becomes a new last section of the target
    course; otherwise it takes ``to_section_number`` when one is given.

    Returns ``{'new_section_id': <id>}``.
    """
    pipeline = DuplicationPipeline(SECTION_COPY, call_context)
    params = validate_parameters(CopySectionParametersSerializer, {
        'from_section_id': from_section_id,
        'to_course_id': to_course_id,
        'to_new_section': to_new_section,
        'to_section_number': to_section_number,
    })
    platform = call_context.platform

    to_course = platform.get_course(params['to_course_id'])
    from_section = platform.get_section(params['from_section_id'])
    from_course = platform.get_course(from_section.course_id)

    from_course_context = platform.get_course_context(from_course.id)
    to_course_context = platform.get_course_context(to_course.id)
    pipeline.authorize(from_course_context, to_course_context)

    def renumber_section(engine, handle):
        section_number = params.get('to_section_number')
        if params['to_new_section']:
            section_number = platform.get_last_section_number(to_course.id) + 1
        if section_number is not None:
            engine.patch_section_number(handle, from_section.id, section_number)

    new_section_id = pipeline.run(from_section.id, from_course_context, to_course.id, patch=renumber_section)
    return {'new_section_id': new_section_id}


def copy_activity(
    call_context: CallContext, from_activity_id, to_course_id, to_section_id=None, to_before_module_id=None,
):
    """
    Copy an activity into another course, with its group configuration.

    When ``to_section_id`` is given the copy is moved into that section, before
    ``to_before_module_id`` if that is given too.

    Returns ``{'new_activity_id': <id>}``.
    """
    pipeline = DuplicationPipeline(ACTIVITY_COPY, call_context)
    params = validate_parameters(CopyActivityParametersSerializer, {
        'from_activity_id': from_activity_id,
        'to_course_id': to_course_id,
        'to_section_id': to_section_id,
        'to_before_module_id': to_before_module_id,
    })
    platform = call_context.platform

    to_course = platform.get_course(params['to_course_id'])
    from_activity = platform.get_activity(params['from_activity_id'])

    to_section = None
    if params.get('to_section_id'):
        to_section = platform.get_section(params['to_section_id'])
        if to_section.course_id != to_course.id:
            raise ValidationError('to_section_id', UserErrors.INVALID_COURSE_ID.format(to_section.id, to_course.id))

    from_activity_context = platform.get_context(ContextLevel.MODULE, from_activity.id)
    to_course_context = platform.get_course_context(to_course.id)
    pipeline.authorize(from_activity_context, to_course_context)

    new_activity_id = pipeline.run(from_activity.id, from_activity_context, to_course.id)

    if to_section is not None:
        platform.move_activity(new_activity_id, to_section.id, params.get('to_before_module_id'))
        log.info('Activity %s moved to section %s', new_activity_id, to_section.id)

    return {'new_activity_id': new_activity_id}


def copy_block(call_context: CallContext, from_block_id, to_course_id):
    """
    Copy a block instance into another course.

    Returns ``{'new_block_id': <id>}``.
    """
    pipeline = DuplicationPipeline(BLOCK_COPY, call_context)
    params = validate_parameters(CopyBlockParametersSerializer, {
        'from_block_id': from_block_id,
        'to_course_id': to_course_id,
    })
    platform = call_context.platform

    to_course = platform.get_course(params['to_course_id'])
    from_block = platform.get_block(params['from_block_id'])
    from_block_context = platform.get_context(ContextLevel.BLOCK, from_block.id)
    from_course = platform.get_enclosing_course(from_block_context)

    to_course_context = platform.get_course_context(to_course.id)
    pipeline.authorize(from_block_context, to_course_context)

    def keep_only_source_block(engine, handle):
        engine.prune_block_folders(handle, keep=from_block.folder_name)

    log.info('Copying block %s of course %s', from_block.id, from_course.id)
    new_block_id = pipeline.run(from_block.id, from_block_context, to_course.id, patch=keep_only_source_block)
    return {'new_block_id': new_block_id}


def copy_filters(call_context: CallContext, from_course_id, to_course_id):
    """
    Copy the filter settings of one course to another.
    """
    pipeline = DuplicationPipeline(FILTERS_COPY, call_context)
    params = validate_parameters(CopyFiltersParametersSerializer, {
        'from_course_id': from_course_id,
        'to_course_id': to_course_id,
    })
    platform = call_context.platform

    from_course = platform.get_course(params['from_course_id'])
    to_course = platform.get_course(params['to_course_id'])

    from_course_context = platform.get_course_context(from_course.id)
    to_course_context = platform.get_course_context(to_course.id)
    pipeline.authorize(from_course_context, to_course_context)

    pipeline.run(from_course.id, from_course_context, to_course.id)


def add_block(call_context: CallContext, course_id, block_name, block_region=None):
    """
    Add a block to the end of a region of a course page.
    """
    params = validate_parameters(AddBlockParametersSerializer, {
        'course_id': course_id,
        'block_name': block_name,
        'block_region': block_region,
    })
    platform = call_context.platform

    course = platform.get_course(params['course_id'])
    context = platform.get_course_context(course.id)
    require_capability(call_context.user, context, MANAGE_BLOCKS)

    blocks = platform.get_block_manager(course)
    blocks.load_blocks()
    blocks.create_all_block_instances()

    if params['block_name'] not in blocks.get_addable_blocks():
        log.warning('Block %s is not addable to course %s', params['block_name'], course.id)
        raise BlockNotAddable(params['block_name'])

    blocks.add_block_at_end_of_default_region(params['block_name'], params.get('block_region'))
    log.info('Block %s added to course %s', params['block_name'], course.id)
