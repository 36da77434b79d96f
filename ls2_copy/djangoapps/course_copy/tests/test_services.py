"""
Tests for the web service registry.
"""
from unittest import mock

import ddt
from django.contrib.auth.models import AnonymousUser

from ls2_copy.djangoapps.course_copy import api, services
from ls2_copy.djangoapps.course_copy.permissions import (
    BACKUP_TARGET_IMPORT,
    MANAGE_BLOCKS,
    RESTORE_TARGET_IMPORT,
)
from ls2_copy.djangoapps.course_copy.serializers import NewSectionSerializer

from .factories import UserFactory
from .utils import CourseCopyTestCase


def disabled_copy_service():
    return services.ExternalService(
        name='LS2 Copy Integration', shortname='ls2_copy_ws', functions=tuple(services.FUNCTIONS), enabled=False,
    )


@ddt.ddt
class ServiceRegistryTest(CourseCopyTestCase):
    """
    Tests for the registered functions and service bundles.
    """

    @ddt.data(
        ('local_ls2_copy_section', api.copy_section, (BACKUP_TARGET_IMPORT, RESTORE_TARGET_IMPORT)),
        ('local_ls2_copy_activity', api.copy_activity, (BACKUP_TARGET_IMPORT, RESTORE_TARGET_IMPORT)),
        ('local_ls2_copy_block', api.copy_block, (BACKUP_TARGET_IMPORT, RESTORE_TARGET_IMPORT)),
        ('local_ls2_copy_filters', api.copy_filters, (BACKUP_TARGET_IMPORT, RESTORE_TARGET_IMPORT)),
        ('local_ls2_copy_add_block', api.add_block, (MANAGE_BLOCKS,)),
    )
    @ddt.unpack
    def test_registered_functions(self, name, handler, capabilities):
        function = services.get_function(name)
        assert function.handler is handler
        assert function.capabilities == capabilities
        assert function.access_type is services.AccessType.WRITE
        assert services.is_exposed(function)
        assert services.is_available(function, self.user)

    def test_result_descriptions(self):
        assert services.get_function('local_ls2_copy_section').returns is NewSectionSerializer
        assert services.get_function('local_ls2_copy_filters').returns is None
        assert services.get_function('local_ls2_copy_add_block').returns is None

    def test_copy_service_bundle(self):
        service = services.get_service('ls2_copy_ws')
        assert service.name == 'LS2 Copy Integration'
        assert service.enabled
        assert service.restricted_users
        assert set(services.FUNCTIONS) <= set(service.functions)
        assert 'core_course_get_contents' in service.functions

    def test_host_functions_are_not_routed(self):
        assert services.get_function('core_webservice_get_site_info') is None
        assert services.get_service('unknown') is None

    def test_available_functions_sorted(self):
        names = [function.name for function in services.available_functions(self.user)]
        assert names == sorted(services.FUNCTIONS)
        assert services.available_services(self.user) == ['ls2_copy_ws']

    def test_disabled_service(self):
        with mock.patch.dict(services.SERVICES, {'ls2_copy_ws': disabled_copy_service()}):
            function = services.get_function('local_ls2_copy_block')
            assert not services.is_exposed(function)
            assert not services.is_available(function, self.user)
            assert services.available_functions(self.user) == []
            assert services.available_services(self.user) == []


class RestrictedServiceTest(CourseCopyTestCase):
    """
    Tests for services that only admit their authorized users.
    """

    def setUp(self):
        super().setUp()
        self.outsider = UserFactory()
        self.function = services.get_function('local_ls2_copy_section')

    def test_only_group_members_are_admitted(self):
        service = services.get_service('ls2_copy_ws')
        assert service.admits(self.user)
        assert not service.admits(self.outsider)
        assert not service.admits(AnonymousUser())

    def test_function_exposed_but_not_available_to_outsiders(self):
        assert services.is_exposed(self.function)
        assert not services.is_available(self.function, self.outsider)
        assert services.available_functions(self.outsider) == []
        assert services.available_services(self.outsider) == []

    def test_group_of_another_service_does_not_admit(self):
        self.admit_to_service(self.outsider, shortname='other_ws')
        assert not services.is_available(self.function, self.outsider)

    def test_unrestricted_service_admits_everyone(self):
        open_service = services.ExternalService(
            name='LS2 Copy Integration', shortname='ls2_copy_ws', functions=tuple(services.FUNCTIONS),
        )
        with mock.patch.dict(services.SERVICES, {'ls2_copy_ws': open_service}):
            assert services.is_available(self.function, self.outsider)
            assert open_service.admits(AnonymousUser())
