"""
Shared setup for course copy tests.
"""
import shutil
import tempfile

from django.contrib.auth.models import Group
from django.test import TestCase

from ls2_copy.djangoapps.course_copy.archive import archive_engine
from ls2_copy.djangoapps.course_copy.data import CallContext, ContextLevel
from ls2_copy.djangoapps.course_copy.permissions import (
    BACKUP_TARGET_IMPORT,
    MANAGE_BLOCKS,
    RESTORE_TARGET_IMPORT,
)
from ls2_copy.djangoapps.course_copy.platform import host_platform
from ls2_copy.djangoapps.course_copy.services import COPY_SERVICE

from .backends import CapabilityBackend
from .factories import UserFactory
from .fakes import FakeArchiveEngine, FakeHostPlatform

SOURCE_COURSE_ID = 2
TARGET_COURSE_ID = 3


class CourseCopyTestMixin:
    """
    Builds two courses on a fake host and a caller with no capabilities.

    Source course 2 has sections 10 (number 1) and 11 (number 2), activity 20
    in section 10, and blocks 30 (html) and 31 (navigation) on its page.
    Target course 3 has sections 40 (number 1) through 42 (number 3).
    """

    # Seed the backends named in the settings instead of private instances,
    # for code that builds its own CallContext.
    use_configured_backends = False

    def setUp(self):
        super().setUp()
        CapabilityBackend.reset()
        self.addCleanup(CapabilityBackend.reset)

        if self.use_configured_backends:
            self.platform = self.build_platform(host_platform())
            self.engine = archive_engine()
        else:
            self.temp_root = tempfile.mkdtemp()
            self.addCleanup(shutil.rmtree, self.temp_root, ignore_errors=True)
            self.platform = self.build_platform(FakeHostPlatform())
            self.engine = FakeArchiveEngine(temp_root=self.temp_root)
        self.user = UserFactory()
        self.admit_to_service(self.user)
        self.call_context = CallContext(user=self.user, platform=self.platform, engine=self.engine)

    def build_platform(self, platform):
        platform.add_course(SOURCE_COURSE_ID)
        platform.add_section(10, SOURCE_COURSE_ID, 1)
        platform.add_section(11, SOURCE_COURSE_ID, 2)
        platform.add_activity(20, SOURCE_COURSE_ID, 10)
        source_context = platform.get_course_context(SOURCE_COURSE_ID)
        platform.add_block(30, 'html', source_context)
        platform.add_block(31, 'navigation', source_context)

        platform.add_course(TARGET_COURSE_ID)
        for number, section_id in enumerate((40, 41, 42), start=1):
            platform.add_section(section_id, TARGET_COURSE_ID, number)
        return platform

    def admit_to_service(self, user, shortname=COPY_SERVICE):
        group, __ = Group.objects.get_or_create(name=shortname)
        user.groups.add(group)

    def course_context(self, course_id):
        return self.platform.get_course_context(course_id)

    def grant(self, capability, context, user=None):
        CapabilityBackend.grant(user or self.user, capability, context)

    def grant_copy(self, source_context, target_course_id=TARGET_COURSE_ID, user=None):
        """
        Grant export on ``source_context`` and import on the target course.
        """
        self.grant(BACKUP_TARGET_IMPORT, source_context, user)
        self.grant(RESTORE_TARGET_IMPORT, self.course_context(target_course_id), user)

    def grant_manage_blocks(self, course_id=TARGET_COURSE_ID, user=None):
        self.grant(MANAGE_BLOCKS, self.course_context(course_id), user)

    def activity_context(self, activity_id):
        return self.platform.get_context(ContextLevel.MODULE, activity_id)

    def block_context(self, block_id):
        return self.platform.get_context(ContextLevel.BLOCK, block_id)

    def assert_no_archives_left(self):
        for export in self.engine.exports:
            assert not export['handle'].base_path.exists(), export['handle']


class CourseCopyTestCase(CourseCopyTestMixin, TestCase):
    pass
