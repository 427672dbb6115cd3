"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import Mock

import pytest


@pytest.fixture
def mock_redis():
    """Mock Redis client for unit tests (sync)."""
    mock = Mock()
    mock.set = Mock(return_value=True)
    mock.get = Mock(return_value=None)
    mock.exists = Mock(return_value=0)
    return mock
