"""
Access to the host LMS that owns courses, sections, activities and blocks.

The copy functions never touch the host's storage directly. They go through a
``HostPlatform`` implementation named by the ``COURSE_COPY_HOST_PLATFORM``
setting, so the host's data model stays behind this interface.
"""
from __future__ import annotations

import abc
import logging
import typing as t
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .data import (
    ActivityRecord,
    BlockRecord,
    ContextLevel,
    ContextNode,
    CourseRecord,
    EntityKind,
    SectionRecord,
)
from .exceptions import NotFound
from . import errors as UserErrors

log = logging.getLogger(__name__)


class BlockManager(abc.ABC):
    """
    The block collection of one course page.
    """

    @abc.abstractmethod
    def load_blocks(self) -> None:
        """
        Load the block instances currently placed on the page.
        """

    @abc.abstractmethod
    def create_all_block_instances(self) -> None:
        """
        Instantiate every loaded block so addability rules can inspect them.
        """

    @abc.abstractmethod
    def get_addable_blocks(self) -> t.Mapping[str, t.Any]:
        """
        Return the block types that may currently be added, keyed by block name.
        """

    @abc.abstractmethod
    def add_block_at_end_of_default_region(self, block_name: str, region: str | None = None) -> None:
        """
        Append a new instance of ``block_name`` to ``region``, or to the default region.
        """


class HostPlatform(abc.ABC):
    """
    Lookups and the few mutations the copy functions need from the host.

    Lookup methods raise ``NotFound`` when the record does not exist.
    """

    @abc.abstractmethod
    def get_course(self, course_id: int) -> CourseRecord:
        pass

    @abc.abstractmethod
    def get_section(self, section_id: int) -> SectionRecord:
        pass

    @abc.abstractmethod
    def get_activity(self, activity_id: int) -> ActivityRecord:
        pass

    @abc.abstractmethod
    def get_block(self, block_id: int) -> BlockRecord:
        pass

    @abc.abstractmethod
    def get_context(self, level: ContextLevel, instance_id: int) -> ContextNode:
        """
        Return the context node of an instance at the given level.
        """

    @abc.abstractmethod
    def get_context_by_id(self, context_id: int) -> ContextNode:
        pass

    @abc.abstractmethod
    def get_last_section_number(self, course_id: int) -> int:
        """
        Return the highest section number currently used in the course.
        """

    @abc.abstractmethod
    def move_activity(self, activity_id: int, section_id: int, before_activity_id: int | None = None) -> None:
        """
        Move an activity into a section, before a sibling when one is given.
        """

    @abc.abstractmethod
    def get_block_manager(self, course: CourseRecord) -> BlockManager:
        """
        Return the block collection of the course's main page.
        """

    def get_course_context(self, course_id: int) -> ContextNode:
        return self.get_context(ContextLevel.COURSE, course_id)

    def get_parent_contexts(self, context: ContextNode, include_self: bool = False) -> list[ContextNode]:
        """
        Return the ancestors of ``context``, nearest first.
        """
        parents = [context] if include_self else []
        parent_id = context.parent_id
        while parent_id is not None:
            parent = self.get_context_by_id(parent_id)
            parents.append(parent)
            parent_id = parent.parent_id
        return parents

    def get_enclosing_course(self, context: ContextNode) -> CourseRecord:
        """
        Return the course whose context contains ``context``.
        """
        for node in self.get_parent_contexts(context, include_self=True):
            if node.level is ContextLevel.COURSE:
                return self.get_course(node.instance_id)
        log.warning('No course context above %s', context)
        raise NotFound(EntityKind.COURSE, None, UserErrors.NO_COURSE_CONTEXT.format(context))


@lru_cache(maxsize=None)
def _load_platform(dotted_path):
    log.info('Loading host platform %s', dotted_path)
    return import_string(dotted_path)()


def host_platform() -> HostPlatform:
    """
    Return the host platform configured in ``COURSE_COPY_HOST_PLATFORM``.
    """
    dotted_path = getattr(settings, 'COURSE_COPY_HOST_PLATFORM', None)
    if not dotted_path:
        raise ImproperlyConfigured('COURSE_COPY_HOST_PLATFORM must name a HostPlatform class.')
    return _load_platform(dotted_path)
