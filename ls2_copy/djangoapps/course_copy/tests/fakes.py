"""
In-memory host platform and a directory-backed archive engine for tests.
"""
import os
import tempfile
import uuid

from lxml import etree
from path import Path as path

from ls2_copy.djangoapps.course_copy.archive import BLOCKS_FOLDER, SECTION_DESCRIPTOR, ArchiveEngine, RestoreSession
from ls2_copy.djangoapps.course_copy.data import (
    ActivityRecord,
    ArchiveHandle,
    BackupScope,
    BlockRecord,
    ContextLevel,
    ContextNode,
    CourseRecord,
    EntityKind,
    PrecheckResult,
    SectionRecord,
)
from ls2_copy.djangoapps.course_copy.exceptions import NotFound
from ls2_copy.djangoapps.course_copy.platform import BlockManager, HostPlatform

SYSTEM_CONTEXT_ID = 1


class FakeBlockManager(BlockManager):
    """
    Block collection of one course page, with a fixed set of addable block types.
    """

    def __init__(self, addable=()):
        self.addable = set(addable)
        self.loaded = False
        self.instances_created = False
        self.added = []

    def load_blocks(self):
        self.loaded = True

    def create_all_block_instances(self):
        self.instances_created = True

    def get_addable_blocks(self):
        return {name: {'name': name} for name in sorted(self.addable)}

    def add_block_at_end_of_default_region(self, block_name, region=None):
        self.added.append((block_name, region or 'side-pre'))


class FakeHostPlatform(HostPlatform):
    """
    A host platform holding its records in dictionaries.

    Every course, activity and block gets a context node; course contexts hang
    off the system context.
    """

    def __init__(self):
        self.courses = {}
        self.sections = {}
        self.activities = {}
        self.blocks = {}
        self.contexts = {}
        self.block_managers = {}
        self.moves = []
        self._next_context_id = SYSTEM_CONTEXT_ID
        self._add_context(ContextLevel.SYSTEM, 0)

    def _add_context(self, level, instance_id, parent=None):
        context = ContextNode(
            id=self._next_context_id,
            level=level,
            instance_id=instance_id,
            parent_id=parent.id if parent else None,
        )
        self._next_context_id += 1
        self.contexts[context.id] = context
        return context

    def add_course(self, course_id, shortname=''):
        course = CourseRecord(id=course_id, shortname=shortname or f'C{course_id}', fullname=f'Course {course_id}')
        self.courses[course_id] = course
        self._add_context(ContextLevel.COURSE, course_id, self.contexts[SYSTEM_CONTEXT_ID])
        return course

    def add_section(self, section_id, course_id, section_number):
        section = SectionRecord(id=section_id, course_id=course_id, section_number=section_number)
        self.sections[section_id] = section
        return section

    def add_activity(self, activity_id, course_id, section_id, module_name='forum'):
        activity = ActivityRecord(id=activity_id, course_id=course_id, section_id=section_id, module_name=module_name)
        self.activities[activity_id] = activity
        self._add_context(ContextLevel.MODULE, activity_id, self.get_course_context(course_id))
        return activity

    def add_block(self, block_id, block_name, parent_context):
        block = BlockRecord(id=block_id, block_name=block_name, parent_context_id=parent_context.id)
        self.blocks[block_id] = block
        self._add_context(ContextLevel.BLOCK, block_id, parent_context)
        return block

    def _lookup(self, records, kind, record_id):
        try:
            return records[record_id]
        except KeyError:
            raise NotFound(kind, record_id)  # lint-amnesty, pylint: disable=raise-missing-from

    def get_course(self, course_id):
        return self._lookup(self.courses, EntityKind.COURSE, course_id)

    def get_section(self, section_id):
        return self._lookup(self.sections, EntityKind.SECTION, section_id)

    def get_activity(self, activity_id):
        return self._lookup(self.activities, EntityKind.ACTIVITY, activity_id)

    def get_block(self, block_id):
        return self._lookup(self.blocks, EntityKind.BLOCK, block_id)

    def get_context(self, level, instance_id):
        for context in self.contexts.values():
            if context.level is level and context.instance_id == instance_id:
                return context
        raise NotFound('context', instance_id)

    def get_context_by_id(self, context_id):
        return self._lookup(self.contexts, 'context', context_id)

    def get_last_section_number(self, course_id):
        numbers = [section.section_number for section in self.sections.values() if section.course_id == course_id]
        return max(numbers, default=0)

    def move_activity(self, activity_id, section_id, before_activity_id=None):
        self.moves.append((activity_id, section_id, before_activity_id))

    def get_block_manager(self, course):
        return self.block_managers.setdefault(course.id, FakeBlockManager())


class FakeRestoreSession(RestoreSession):
    """
    Restore session that reports what the engine was told to report.
    """

    def __init__(self, engine, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.engine = engine
        self.destroyed = False

    def precheck(self):
        return self.engine.precheck_result

    def execute(self):
        if self.engine.execute_error is not None:
            raise self.engine.execute_error
        self.engine.restores.append({
            'archive_id': self.handle.archive_id,
            'target_course_id': self.target_course_id,
            'facets': self.facets,
            'section_numbers': self.engine.read_section_numbers(self.handle),
            'block_folders': self.engine.list_block_folders(self.handle),
        })
        return list(self.engine.restored_items)

    def destroy(self):
        self.destroyed = True


class FakeArchiveEngine(ArchiveEngine):
    """
    Archive engine writing the standard archive layout to a temp directory.

    Section exports write a section descriptor; block exports write one folder
    per entry of ``block_folders``. Tests set ``precheck_result``,
    ``restored_items`` and ``execute_error`` to steer the restore.
    """

    def __init__(self, temp_root=None, **options):
        super().__init__(temp_root=temp_root, **options)
        self.temp_root = temp_root or tempfile.gettempdir()
        self.block_folders = []
        self.precheck_result = PrecheckResult()
        self.restored_items = []
        self.execute_error = None
        self.export_error = None
        self.exports = []
        self.restores = []
        self.sessions = []

    def export(self, scope, source_id, user_id, facets):
        if self.export_error is not None:
            raise self.export_error

        base_path = path(tempfile.mkdtemp(prefix='ls2copy-', dir=self.temp_root))
        handle = ArchiveHandle(archive_id=uuid.uuid4().hex, base_path=base_path)
        if scope is BackupScope.SECTION:
            self._write_section(base_path, source_id)
        elif scope is BackupScope.BLOCK:
            for folder in self.block_folders:
                os.makedirs(base_path / BLOCKS_FOLDER / folder)

        self.exports.append({
            'scope': scope,
            'source_id': source_id,
            'user_id': user_id,
            'facets': facets,
            'handle': handle,
        })
        return handle

    def _write_section(self, base_path, section_id):
        descriptor = base_path / SECTION_DESCRIPTOR.format(section_id=section_id)
        os.makedirs(descriptor.parent)
        section = etree.Element('section', id=str(section_id))
        etree.SubElement(section, 'number').text = '1'
        etree.SubElement(section, 'name').text = '$@NULL@$'
        etree.ElementTree(section).write(str(descriptor), xml_declaration=True, encoding='UTF-8')

    def create_restore(self, handle, target_course_id, user_id, facets):
        session = FakeRestoreSession(self, handle, target_course_id, user_id, facets)
        self.sessions.append(session)
        return session

    def read_section_numbers(self, handle):
        """
        Section numbers found in the archive's section descriptors.
        """
        sections_dir = handle.base_path / 'sections'
        if not os.path.isdir(sections_dir):
            return []
        numbers = []
        for descriptor in sorted(sections_dir.glob('section_*/section.xml')):
            numbers.append(int(etree.parse(str(descriptor)).findtext('number')))
        return numbers

    def list_block_folders(self, handle):
        blocks_dir = handle.base_path / BLOCKS_FOLDER
        if not os.path.isdir(blocks_dir):
            return []
        return sorted(os.listdir(blocks_dir))

    @property
    def last_handle(self):
        return self.exports[-1]['handle']
