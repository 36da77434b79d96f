"""
Value objects for the course copy pipeline.
"""

from __future__ import annotations

import typing as t
from dataclasses import dataclass
from enum import Enum

from django.conf import settings
from path import Path as path

if t.TYPE_CHECKING:
    from django.contrib.auth.models import User  # pylint: disable=imported-auth-user

    from .archive import ArchiveEngine
    from .platform import HostPlatform


class EntityKind(Enum):
    """
    Kinds of host entities the copy functions address.
    """
    SECTION = 'section'
    ACTIVITY = 'activity'
    BLOCK = 'block'
    COURSE = 'course'


class ContextLevel(Enum):
    """
    Levels of the host's permission context tree.

    Values match the host's own context level constants.
    """
    SYSTEM = 10
    COURSE = 50
    MODULE = 70
    BLOCK = 80


class BackupScope(Enum):
    """
    What a single archive export covers.
    """
    COURSE = 'course'
    SECTION = 'section'
    ACTIVITY = 'activity'
    BLOCK = 'block'


class Facet(Enum):
    """
    Named categories of content that can be switched on or off for one archive stage.
    """
    ACTIVITIES = 'activities'
    BLOCKS = 'blocks'
    FILTERS = 'filters'
    GROUPS = 'groups'


class CopyStage(Enum):
    """
    States of a duplication pipeline, in the order they are entered.
    """
    VALIDATING = 'validating'
    AUTHORIZING = 'authorizing'
    EXPORTING = 'exporting'
    PATCHING_METADATA = 'patching_metadata'
    IMPORTING = 'importing'
    PRECHECKING = 'prechecking'
    COMMITTING = 'committing'
    CLEANING_UP = 'cleaning_up'
    DONE = 'done'
    ABORTED = 'aborted'


@dataclass(frozen=True)
class FacetToggles:
    """
    Facet inclusion flags applied to a single export or restore stage.

    Facets that are not mentioned keep whatever default the archive engine
    uses. Instances are immutable; the builder methods return new ones.
    """
    overrides: tuple[tuple[Facet, bool], ...] = ()

    @classmethod
    def disabling(cls, *facets: Facet) -> FacetToggles:
        return cls(tuple((facet, False) for facet in facets))

    @classmethod
    def only(cls, facet: Facet) -> FacetToggles:
        """
        Switch off every facet except ``facet``, which keeps its default.
        """
        return cls.disabling(*(other for other in Facet if other is not facet))

    def enabling(self, *facets: Facet) -> FacetToggles:
        values = self.as_dict()
        values.update((facet, True) for facet in facets)
        return FacetToggles(tuple(values.items()))

    def as_dict(self) -> dict[Facet, bool]:
        return dict(self.overrides)

    def is_enabled(self, facet: Facet, default: bool = True) -> bool:
        return self.as_dict().get(facet, default)


@dataclass(frozen=True)
class ContextNode:
    """
    A node of the host's permission context tree.
    """
    id: int
    level: ContextLevel
    instance_id: int
    parent_id: int | None = None

    def __str__(self):
        return f'context {self.id} ({self.level.name.lower()} {self.instance_id})'


@dataclass(frozen=True)
class CourseRecord:
    id: int
    shortname: str = ''
    fullname: str = ''


@dataclass(frozen=True)
class SectionRecord:
    id: int
    course_id: int
    section_number: int
    name: str = ''


@dataclass(frozen=True)
class ActivityRecord:
    """
    A course module (an activity placed in a section).
    """
    id: int
    course_id: int
    section_id: int
    module_name: str = ''


@dataclass(frozen=True)
class BlockRecord:
    """
    A block instance attached to a parent context.
    """
    id: int
    block_name: str
    parent_context_id: int

    @property
    def folder_name(self) -> str:
        """
        Name of this block's subfolder inside an exported archive.
        """
        return f'{self.block_name}_{self.id}'


@dataclass(frozen=True)
class ArchiveHandle:
    """
    A transient export produced by the archive engine.
    """
    archive_id: str
    base_path: path


@dataclass(frozen=True)
class PrecheckResult:
    """
    Outcome of the restore precheck. Any error blocks the restore.
    """
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def describe(self) -> str:
        return ''.join(self.errors) + ''.join(self.warnings)


@dataclass(frozen=True)
class RestoredItem:
    """
    One completed restore task, as reported by the archive engine.
    """
    kind: EntityKind
    new_id: int
    original_context_id: int | None = None


@dataclass(frozen=True)
class CallContext:
    """
    Everything a copy function needs besides its own arguments.
    """
    user: User
    platform: HostPlatform
    engine: ArchiveEngine
    keep_temp_directories: bool = False

    @classmethod
    def for_user(cls, user) -> CallContext:
        """
        Build the call context for ``user`` from the Django settings.
        """
        # Imported here: both modules import data.py.
        from .archive import archive_engine
        from .platform import host_platform

        return cls(
            user=user,
            platform=host_platform(),
            engine=archive_engine(),
            keep_temp_directories=bool(getattr(settings, 'KEEP_TEMP_DIRECTORIES_ON_BACKUP', False)),
        )
