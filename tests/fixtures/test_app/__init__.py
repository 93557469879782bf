"""Test application package."""

from .controllers import (
    AsyncController,
    ClassLevelController,
    CountingController,
    Foo,
    GreetingController,
    SlowController,
)
from .middleware import ExecutionTracker
from .services.templates import RecordingRenderer

__all__ = [
    "AsyncController",
    "ClassLevelController",
    "CountingController",
    "Foo",
    "GreetingController",
    "SlowController",
    "ExecutionTracker",
    "RecordingRenderer",
]
