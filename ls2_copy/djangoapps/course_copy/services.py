"""
Registry of the web service functions and service bundles this app provides.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from enum import Enum

from . import api
from .permissions import BACKUP_TARGET_IMPORT, MANAGE_BLOCKS, RESTORE_TARGET_IMPORT
from .serializers import (
    AddBlockParametersSerializer,
    CopyActivityParametersSerializer,
    CopyBlockParametersSerializer,
    CopyFiltersParametersSerializer,
    CopySectionParametersSerializer,
    NewActivitySerializer,
    NewBlockSerializer,
    NewSectionSerializer,
)

COPY_SERVICE = 'ls2_copy_ws'


class AccessType(Enum):
    READ = 'read'
    WRITE = 'write'


@dataclass(frozen=True)
class ExternalFunction:
    """
    A remotely callable function and the description published for it.
    """
    name: str
    handler: t.Callable
    description: str
    parameters: type
    returns: type | None = None
    capabilities: tuple[str, ...] = ()
    access_type: AccessType = AccessType.WRITE
    services: tuple[str, ...] = (COPY_SERVICE,)


@dataclass(frozen=True)
class ExternalService:
    """
    A named bundle of functions that can be enabled as a whole.

    Bundles may list functions provided by the host itself; only the ones
    registered in ``FUNCTIONS`` are served here. A bundle with
    ``restricted_users`` admits only members of the auth group named after
    its shortname.
    """
    name: str
    shortname: str
    functions: tuple[str, ...]
    enabled: bool = True
    restricted_users: bool = False

    def admits(self, user) -> bool:
        if not self.restricted_users:
            return True
        return user.is_authenticated and user.groups.filter(name=self.shortname).exists()


COPY_CAPABILITIES = (BACKUP_TARGET_IMPORT, RESTORE_TARGET_IMPORT)

FUNCTIONS = {
    function.name: function for function in (
        ExternalFunction(
            name='local_ls2_copy_section',
            handler=api.copy_section,
            description='Copy a section into another course',
            parameters=CopySectionParametersSerializer,
            returns=NewSectionSerializer,
            capabilities=COPY_CAPABILITIES,
        ),
        ExternalFunction(
            name='local_ls2_copy_activity',
            handler=api.copy_activity,
            description='Copy an activity into another course',
            parameters=CopyActivityParametersSerializer,
            returns=NewActivitySerializer,
            capabilities=COPY_CAPABILITIES,
        ),
        ExternalFunction(
            name='local_ls2_copy_block',
            handler=api.copy_block,
            description='Copy a block into another course',
            parameters=CopyBlockParametersSerializer,
            returns=NewBlockSerializer,
            capabilities=COPY_CAPABILITIES,
        ),
        ExternalFunction(
            name='local_ls2_copy_filters',
            handler=api.copy_filters,
            description='Copy the filter settings of a course into another course',
            parameters=CopyFiltersParametersSerializer,
            capabilities=COPY_CAPABILITIES,
        ),
        ExternalFunction(
            name='local_ls2_copy_add_block',
            handler=api.add_block,
            description='Add a block to a course',
            parameters=AddBlockParametersSerializer,
            capabilities=(MANAGE_BLOCKS,),
        ),
    )
}

SERVICES = {
    COPY_SERVICE: ExternalService(
        name='LS2 Copy Integration',
        shortname=COPY_SERVICE,
        functions=(
            'core_webservice_get_site_info',
            'core_course_get_contents',
            'core_block_get_course_blocks',
            'local_ls2_copy_section',
            'local_ls2_copy_activity',
            'local_ls2_copy_block',
            'local_ls2_copy_filters',
            'local_ls2_copy_add_block',
        ),
        restricted_users=True,
    ),
}


def get_function(name):
    """
    Return the registered function called ``name``, or None.
    """
    return FUNCTIONS.get(name)


def get_service(shortname):
    return SERVICES.get(shortname)


def _exposing_services(function):
    for shortname in function.services:
        service = SERVICES.get(shortname)
        if service is not None and service.enabled and function.name in service.functions:
            yield service


def is_exposed(function):
    """
    Whether ``function`` belongs to at least one enabled service.
    """
    return next(_exposing_services(function), None) is not None


def is_available(function, user):
    """
    Whether ``function`` belongs to at least one enabled service that admits ``user``.
    """
    return any(service.admits(user) for service in _exposing_services(function))


def available_services(user):
    """
    Shortnames of the enabled services that admit ``user``, sorted.
    """
    return sorted(shortname for shortname, service in SERVICES.items() if service.enabled and service.admits(user))


def available_functions(user):
    """
    Registered functions that some service available to ``user`` exposes, sorted by name.
    """
    return [FUNCTIONS[name] for name in sorted(FUNCTIONS) if is_available(FUNCTIONS[name], user)]
