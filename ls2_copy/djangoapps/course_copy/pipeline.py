"""
The export, patch, restore and cleanup pipeline shared by the copy functions.

Each copy function differs only in its ``CopyPolicy``: what the export covers,
which facets each stage switches, and how the new entity is found among the
restored items.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass

from edx_django_utils.monitoring import set_custom_attribute

from . import errors as UserErrors
from .data import (
    ArchiveHandle,
    BackupScope,
    CallContext,
    ContextNode,
    CopyStage,
    EntityKind,
    Facet,
    FacetToggles,
    RestoredItem,
)
from .exceptions import InvariantViolation, PrecheckFailed
from .permissions import BACKUP_TARGET_IMPORT, RESTORE_TARGET_IMPORT, require_capability

if t.TYPE_CHECKING:
    from .archive import ArchiveEngine

log = logging.getLogger(__name__)

ArchivePatch = t.Callable[['ArchiveEngine', ArchiveHandle], None]
NewIdResolver = t.Callable[[t.Sequence[RestoredItem], ContextNode], t.Optional[int]]


def first_of_kind(kind: EntityKind) -> NewIdResolver:
    """
    Resolve the new id as the first restored item of ``kind``.
    """
    def resolve(items, source_context):  # pylint: disable=unused-argument
        for item in items:
            if item.kind is kind:
                return item.new_id
        return None
    return resolve


def restored_from_context(kind: EntityKind) -> NewIdResolver:
    """
    Resolve the new id as the restored item of ``kind`` that came from the source context.
    """
    def resolve(items, source_context):
        for item in items:
            if item.kind is kind and item.original_context_id == source_context.id:
                return item.new_id
        return None
    return resolve


@dataclass(frozen=True)
class CopyPolicy:
    """
    What varies between the copy functions.
    """
    name: str
    scope: BackupScope
    export_facets: FacetToggles
    import_facets: FacetToggles
    new_entity: EntityKind | None = None
    resolve_new_id: NewIdResolver | None = None


SECTION_COPY = CopyPolicy(
    name='section',
    scope=BackupScope.SECTION,
    export_facets=FacetToggles.disabling(Facet.ACTIVITIES),
    import_facets=FacetToggles.disabling(Facet.ACTIVITIES),
    new_entity=EntityKind.SECTION,
    resolve_new_id=first_of_kind(EntityKind.SECTION),
)

# Copied activities always carry their group configuration.
ACTIVITY_COPY = CopyPolicy(
    name='activity',
    scope=BackupScope.ACTIVITY,
    export_facets=FacetToggles(),
    import_facets=FacetToggles().enabling(Facet.GROUPS),
    new_entity=EntityKind.ACTIVITY,
    resolve_new_id=restored_from_context(EntityKind.ACTIVITY),
)

BLOCK_COPY = CopyPolicy(
    name='block',
    scope=BackupScope.BLOCK,
    export_facets=FacetToggles.only(Facet.BLOCKS),
    import_facets=FacetToggles.disabling(Facet.ACTIVITIES, Facet.FILTERS),
    new_entity=EntityKind.BLOCK,
    resolve_new_id=first_of_kind(EntityKind.BLOCK),
)

FILTERS_COPY = CopyPolicy(
    name='filters',
    scope=BackupScope.COURSE,
    export_facets=FacetToggles.only(Facet.FILTERS),
    import_facets=FacetToggles.disabling(Facet.ACTIVITIES, Facet.BLOCKS),
)


class DuplicationPipeline:
    """
    Runs one copy through its stages and owns the archive it creates.

    The pipeline starts in ``VALIDATING``; callers look up and validate their
    records, then call ``authorize`` and ``run``. Once ``run`` has exported an
    archive, the archive is discarded on every exit path unless the call
    context keeps temp directories.
    """

    def __init__(self, policy: CopyPolicy, call_context: CallContext):
        self.policy = policy
        self.context = call_context
        self.stage = CopyStage.VALIDATING
        self.history = [CopyStage.VALIDATING]
        self.handle = None
        self.log_prefix = f'Course copy {policy.name}'

    def _advance(self, stage):
        self.stage = stage
        self.history.append(stage)
        log.debug('%s: %s', self.log_prefix, stage.value)

    @property
    def user_id(self):
        return self.context.user.pk

    def authorize(self, source_context: ContextNode, target_context: ContextNode) -> None:
        """
        Check the export capability on the source and the restore capability on the target.
        """
        self._advance(CopyStage.AUTHORIZING)
        require_capability(self.context.user, source_context, BACKUP_TARGET_IMPORT)
        require_capability(self.context.user, target_context, RESTORE_TARGET_IMPORT)

    def run(
        self,
        source_id: int,
        source_context: ContextNode,
        target_course_id: int,
        patch: ArchivePatch | None = None,
    ) -> int | None:
        """
        Export ``source_id``, optionally patch the archive, and restore it into the target course.

        Returns the new entity id when the policy resolves one.
        """
        if self.stage is not CopyStage.AUTHORIZING:
            raise InvariantViolation(f'{self.log_prefix}: run() called before authorize()')

        engine = self.context.engine
        self.log_prefix = f'Course copy {self.policy.name} {source_id} -> course {target_course_id}'
        set_custom_attribute('course_copy_policy', self.policy.name)

        try:
            self._advance(CopyStage.EXPORTING)
            log.info('%s: export started', self.log_prefix)
            self.handle = engine.export(self.policy.scope, source_id, self.user_id, self.policy.export_facets)

            if patch is not None:
                self._advance(CopyStage.PATCHING_METADATA)
                patch(engine, self.handle)

            new_id = self._restore(engine, target_course_id, source_context)
        except Exception as exc:
            failed_stage = self.stage
            try:
                self._cleanup()
            except Exception:  # pylint: disable=broad-except
                log.exception('%s: temp data cleanup failed', self.log_prefix)
            self._advance(CopyStage.ABORTED)
            set_custom_attribute('course_copy_failed_stage', failed_stage.value)
            if isinstance(exc, (PrecheckFailed, InvariantViolation)):
                log.error('%s: aborted: %s', self.log_prefix, exc)
            else:
                log.exception('%s: aborted by unexpected error', self.log_prefix)
            raise

        self._cleanup()
        self._advance(CopyStage.DONE)
        log.info('%s: completed, new id %s', self.log_prefix, new_id)
        return new_id

    def _restore(self, engine, target_course_id, source_context):
        self._advance(CopyStage.IMPORTING)
        session = engine.create_restore(self.handle, target_course_id, self.user_id, self.policy.import_facets)
        try:
            self._advance(CopyStage.PRECHECKING)
            result = session.precheck()
            if result.has_errors:
                raise PrecheckFailed(result)
            for warning in result.warnings:
                log.warning('%s: precheck warning: %s', self.log_prefix, warning)

            self._advance(CopyStage.COMMITTING)
            items = session.execute()
        except Exception:
            try:
                session.destroy()
            except Exception:  # pylint: disable=broad-except
                log.exception('%s: restore session cleanup failed', self.log_prefix)
            raise
        session.destroy()

        if self.policy.resolve_new_id is None:
            return None

        new_id = self.policy.resolve_new_id(items, source_context)
        if new_id is None:
            raise InvariantViolation(UserErrors.MISSING_NEW_ENTITY.format(self.policy.new_entity.value))
        return new_id

    def _cleanup(self):
        self._advance(CopyStage.CLEANING_UP)
        if self.handle is None:
            return
        if self.context.keep_temp_directories:
            log.info('%s: keeping temp data at %s', self.log_prefix, self.handle.base_path)
            return
        self.context.engine.discard(self.handle)
