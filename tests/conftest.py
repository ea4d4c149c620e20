"""
Shared fixtures for mdjsx tests
"""

import pytest

from mdjsx.lib.log import state_disconnectFromLogger
from mdjsx.lib.plugin import markdown_make


@pytest.fixture(autouse=True)
def logger_detached():
    """Keep a state connected by one test from leaking into the next"""
    yield
    state_disconnectFromLogger()


@pytest.fixture
def md():
    """Default parser rendering to call expressions"""
    return markdown_make()
