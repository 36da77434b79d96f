"""
Interface to the host's backup/restore engine.

The engine packages an entity into an archive on disk and restores archives
into a course. Copy functions only drive it; they never read archives except
through the two narrow edits defined here (section number patching and block
folder pruning), which assume the standard archive layout:

    <base_path>/sections/section_<section id>/section.xml
    <base_path>/course/blocks/<block name>_<block id>/
"""
from __future__ import annotations

import abc
import logging
import os
import shutil
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string
from lxml import etree

from .data import ArchiveHandle, BackupScope, FacetToggles, PrecheckResult, RestoredItem
from .exceptions import InvariantViolation

log = logging.getLogger(__name__)

SECTION_DESCRIPTOR = 'sections/section_{section_id}/section.xml'
BLOCKS_FOLDER = 'course/blocks'


class RestoreSession(abc.ABC):
    """
    One restore of an archive into a course, checked before it is committed.
    """

    def __init__(self, handle: ArchiveHandle, target_course_id: int, user_id: int, facets: FacetToggles):
        self.handle = handle
        self.target_course_id = target_course_id
        self.user_id = user_id
        self.facets = facets

    @abc.abstractmethod
    def precheck(self) -> PrecheckResult:
        """
        Dry-run the restore and report blocking errors and warnings.
        """

    @abc.abstractmethod
    def execute(self) -> list[RestoredItem]:
        """
        Commit the restore and report the tasks that completed.
        """

    def destroy(self) -> None:
        """
        Release engine resources held by this session.
        """


class ArchiveEngine(abc.ABC):
    """
    Base class for backup/restore engines.
    """

    def __init__(self, **options):
        self.options = options

    @abc.abstractmethod
    def export(self, scope: BackupScope, source_id: int, user_id: int, facets: FacetToggles) -> ArchiveHandle:
        """
        Write an archive of one entity to temporary storage.
        """

    @abc.abstractmethod
    def create_restore(
        self, handle: ArchiveHandle, target_course_id: int, user_id: int, facets: FacetToggles,
    ) -> RestoreSession:
        """
        Prepare restoring ``handle`` into an existing course, adding to its content.
        """

    def patch_section_number(self, handle: ArchiveHandle, section_id: int, number: int) -> None:
        """
        Rewrite the section number stored in an exported section's descriptor.
        """
        descriptor = handle.base_path / SECTION_DESCRIPTOR.format(section_id=section_id)
        if not os.path.isfile(descriptor):
            raise InvariantViolation(f'Archive {handle.archive_id} has no descriptor for section {section_id}')

        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        tree = etree.parse(str(descriptor), parser)
        number_node = next(tree.iter('number'), None)
        if number_node is None:
            raise InvariantViolation(f'Section {section_id} descriptor in archive {handle.archive_id} has no number')

        number_node.text = str(number)
        tree.write(str(descriptor), xml_declaration=True, encoding='UTF-8')
        log.debug('Archive %s: section %s renumbered to %s', handle.archive_id, section_id, number)

    def prune_block_folders(self, handle: ArchiveHandle, keep: str) -> list[str]:
        """
        Delete every block folder of the archive except ``keep``.

        Returns the names of the removed folders.
        """
        blocks_dir = handle.base_path / BLOCKS_FOLDER
        if not os.path.isdir(blocks_dir):
            return []

        removed = []
        for name in sorted(os.listdir(blocks_dir)):
            if name == keep:
                continue
            folder = blocks_dir / name
            if os.path.isdir(folder):
                shutil.rmtree(folder)
            else:
                os.remove(folder)
            removed.append(name)

        if removed:
            log.info('Archive %s: removed block folders %s', handle.archive_id, ', '.join(removed))
        return removed

    def discard(self, handle: ArchiveHandle) -> None:
        """
        Delete the archive's temporary storage.
        """
        if os.path.exists(handle.base_path):
            shutil.rmtree(handle.base_path)
            log.info('Archive %s: temp data cleared', handle.archive_id)


@lru_cache(maxsize=None)
def _load_engine(dotted_path):
    options = getattr(settings, 'COURSE_COPY_ARCHIVE_ENGINE_OPTIONS', None) or {}
    log.info('Loading archive engine %s', dotted_path)
    return import_string(dotted_path)(**options)


def archive_engine() -> ArchiveEngine:
    """
    Return the archive engine configured in ``COURSE_COPY_ARCHIVE_ENGINE``.
    """
    dotted_path = getattr(settings, 'COURSE_COPY_ARCHIVE_ENGINE', None)
    if not dotted_path:
        raise ImproperlyConfigured('COURSE_COPY_ARCHIVE_ENGINE must name an ArchiveEngine class.')
    return _load_engine(dotted_path)
