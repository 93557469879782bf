"""Switchyard - async HTTP middleware application core.

This module provides the public API for assembling and running an
application: the application object and its factories, the service
container, routing, and the middleware used to dispatch requests to
controllers and to turn errors into responses.
"""

from .application import Application
from .container import (
    DependencyCircularReferenceError,
    DependencyContainer,
    DependencyNotFoundError,
)
from .emitter import Emitter, StreamEmitter
from .exceptions import (
    ConfigurationError,
    DuplicateRouteError,
    InvalidMiddlewareError,
    RouteNotFoundError,
    SwitchyardError,
)
from .factories import ApplicationFactory, ErrorHandlerFactory, ErrorResponseGeneratorFactory
from .http import Request, Response, Stream
from .middleware import (
    ControllerMiddleware,
    DispatchMiddleware,
    ErrorHandlerMiddleware,
    ErrorResponseGenerator,
    Middleware,
    NotFoundHandler,
    RequestHandler,
    RouteMiddleware,
)
from .router import PathRouter, Route, RouteResult, Router
from .template import TemplateRenderer

__all__ = [
    # Application
    "Application",
    "ApplicationFactory",
    "ErrorHandlerFactory",
    "ErrorResponseGeneratorFactory",
    # Container
    "DependencyContainer",
    "DependencyCircularReferenceError",
    "DependencyNotFoundError",
    # HTTP
    "Request",
    "Response",
    "Stream",
    "Emitter",
    "StreamEmitter",
    "TemplateRenderer",
    # Routing
    "PathRouter",
    "Route",
    "RouteResult",
    "Router",
    # Middleware
    "ControllerMiddleware",
    "DispatchMiddleware",
    "ErrorHandlerMiddleware",
    "ErrorResponseGenerator",
    "Middleware",
    "NotFoundHandler",
    "RequestHandler",
    "RouteMiddleware",
    # Errors
    "ConfigurationError",
    "DuplicateRouteError",
    "InvalidMiddlewareError",
    "RouteNotFoundError",
    "SwitchyardError",
]
