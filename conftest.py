"""  # lint-amnesty, pylint: disable=django-not-configured
Default unit test configuration and fixtures.
"""

from unittest import TestCase

import pytest

from ls2_copy.djangoapps.course_copy.archive import _load_engine
from ls2_copy.djangoapps.course_copy.platform import _load_platform

# When using self.assertEquals, diffs are truncated. We don't want that, always
# show the whole diff.
TestCase.maxDiff = None


@pytest.fixture(autouse=True)
def _clear_course_copy_backends():
    """
    Give every test freshly built host platform and archive engine backends.
    """
    _load_platform.cache_clear()
    _load_engine.cache_clear()
    yield
    _load_platform.cache_clear()
    _load_engine.cache_clear()
