"""Base middleware types and the pipeline that chains them.

Middleware receives a request and the next handler in the chain and returns
a response, optionally delegating to the handler. A pipeline is itself
middleware, so pipelines can be nested.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from functools import reduce
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..exceptions import InvalidMiddlewareError
from ..http import Request, Response

if TYPE_CHECKING:
    from ..container import DependencyContainer, Key

MiddlewareCallable = Callable[[Request, "RequestHandler"], Awaitable[Response] | Response]


@runtime_checkable
class RequestHandler(Protocol):
    async def handle(self, request: Request) -> Response:
        """Produce a response for the request."""
        ...


class Middleware(ABC):
    """Base class for request processing middleware.

    Examples:
        Add a header to every response:

        >>> class PoweredBy(Middleware):
        ...     async def process(self, request, handler):
        ...         response = await handler.handle(request)
        ...         return response.with_header("X-Powered-By", "switchyard")
    """

    @abstractmethod
    async def process(self, request: Request, handler: RequestHandler) -> Response:
        """Process the request, optionally delegating to ``handler``."""
        pass


async def maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class CallableMiddleware(Middleware):
    """Adapts a ``(request, handler)`` function into middleware.

    Both plain functions and coroutine functions are accepted.
    """

    def __init__(self, func: MiddlewareCallable):
        self.func = func

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        return await maybe_await(self.func(request, handler))


class LazyLoadingMiddleware(Middleware):
    """Middleware pulled from the container each time it runs."""

    def __init__(self, container: "DependencyContainer", key: "Key"):
        self.container = container
        self.key = key

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        middleware = self.container.get(self.key)
        if hasattr(middleware, "process"):
            return await maybe_await(middleware.process(request, handler))
        if callable(middleware):
            return await maybe_await(middleware(request, handler))
        raise InvalidMiddlewareError.for_value(middleware)


class PathMiddleware(Middleware):
    """Runs the wrapped middleware only beneath a path prefix."""

    def __init__(self, prefix: str, middleware: Middleware):
        self.prefix = "/" + prefix.strip("/")
        self.middleware = middleware

    def matches(self, path: str) -> bool:
        if self.prefix == "/":
            return True
        return path == self.prefix or path.startswith(self.prefix + "/")

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        if not self.matches(request.path):
            return await handler.handle(request)
        return await self.middleware.process(request, handler)


class _Next:
    """Handler that runs one middleware with the rest of the chain behind it."""

    def __init__(self, middleware: Middleware, handler: RequestHandler):
        self.middleware = middleware
        self.handler = handler

    async def handle(self, request: Request) -> Response:
        return await self.middleware.process(request, self.handler)


class MiddlewarePipeline(Middleware):
    """Ordered sequence of middleware.

    Middleware runs in the order it was piped. When every stage delegates,
    the request reaches the handler passed to ``process``.
    """

    def __init__(self, middleware: list[Middleware] | None = None):
        self.middleware: list[Middleware] = list(middleware or [])

    def pipe(self, middleware: Middleware) -> None:
        self.middleware.append(middleware)

    def __len__(self) -> int:
        return len(self.middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(self.middleware)

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        # Build the chain by reducing from right to left
        chain: RequestHandler = reduce(
            lambda next, mw: _Next(mw, next),
            reversed(self.middleware),
            handler,
        )
        return await chain.handle(request)
