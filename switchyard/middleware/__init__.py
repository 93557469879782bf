"""Middleware infrastructure for request processing.

Middleware components wrap the request handler to provide routing,
dispatching, error handling and other cross-cutting concerns. They follow
the chain of responsibility pattern: each receives the request plus the next
handler and decides whether to delegate.
"""

from .base import (
    CallableMiddleware,
    LazyLoadingMiddleware,
    Middleware,
    MiddlewarePipeline,
    PathMiddleware,
    RequestHandler,
)
from .controller import ControllerMiddleware
from .errors import (
    ErrorHandlerMiddleware,
    ErrorResponseGenerator,
    NotFoundHandler,
    format_stack_trace,
)
from .logging import LoggingMiddleware
from .routing import DispatchMiddleware, RouteMiddleware

__all__ = [
    # Base classes
    "Middleware",
    "MiddlewarePipeline",
    "RequestHandler",
    # Adapters
    "CallableMiddleware",
    "ControllerMiddleware",
    "LazyLoadingMiddleware",
    "PathMiddleware",
    # Routing
    "DispatchMiddleware",
    "RouteMiddleware",
    # Error handling
    "ErrorHandlerMiddleware",
    "ErrorResponseGenerator",
    "NotFoundHandler",
    "format_stack_trace",
    # Observability
    "LoggingMiddleware",
]
