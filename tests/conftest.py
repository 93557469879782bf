"""Central test fixtures - imports from unified test_app."""

from unittest.mock import AsyncMock, Mock

import pytest

from switchyard import DependencyContainer, Request, Response

# Import all test doubles from unified test_app
from tests.fixtures.test_app import (
    CountingController,
    ExecutionTracker,
    RecordingRenderer,
    SlowController,
)


@pytest.fixture
def container() -> DependencyContainer:
    """Create an empty dependency container."""
    return DependencyContainer()


@pytest.fixture
def request_() -> Request:
    """Create a GET request for /users/42."""
    return Request("GET", "/users/42?expand=1")


@pytest.fixture
def response() -> Response:
    """Create a blank response."""
    return Response()


@pytest.fixture
def handler(response: Response) -> Mock:
    """Create a next-handler double returning ``response``."""
    next_handler = Mock()
    next_handler.handle = AsyncMock(return_value=response)
    return next_handler


@pytest.fixture
def renderer() -> RecordingRenderer:
    """Create a template renderer that records its calls."""
    return RecordingRenderer("<h1>Oops</h1>")


@pytest.fixture
def execution_tracker() -> ExecutionTracker:
    """Create an execution tracker middleware."""
    return ExecutionTracker()


@pytest.fixture(autouse=True)
def reset_controller_counters():
    """Reset the instance counters of the counting controllers around each test."""
    CountingController.instances = SlowController.instances = 0
    yield
    CountingController.instances = SlowController.instances = 0
