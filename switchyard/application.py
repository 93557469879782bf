import logging
from collections.abc import Iterable
from typing import Any

from .container import DependencyContainer
from .emitter import Emitter, StreamEmitter
from .exceptions import DuplicateRouteError, InvalidMiddlewareError
from .http import Request, Response
from .middleware import (
    CallableMiddleware,
    ControllerMiddleware,
    LazyLoadingMiddleware,
    Middleware,
    MiddlewarePipeline,
    NotFoundHandler,
    PathMiddleware,
    RequestHandler,
)
from .middleware.controller import SEPARATOR
from .router import Route, Router

LOGGER = logging.getLogger(__name__)


class Application:
    """Top-level request handler composing a pipeline and a router.

    Middleware is piped in the order it should run. Routes are registered
    with the router; requests reach them once routing and dispatch stages
    have been piped (``ApplicationFactory`` does this from configuration).

    Args:
        router: Router that routes are registered with.
        container: Container used to resolve middleware given by service key.
        default_handler: Handler invoked when the pipeline is exhausted.
            Defaults to a ``NotFoundHandler``.
        emitter: Emitter used by ``run``. Defaults to a ``StreamEmitter``.
        response_prototype: Response that responses built by the framework
            start from.

    Examples:
        >>> app = Application(PathRouter())
        >>> app.pipe(RouteMiddleware(app.router, app.response_prototype))
        >>> app.pipe(DispatchMiddleware())
        >>> app.get("/users/{id}", "myapp.controllers.Users::show")
        >>> response = await app.handle(Request("GET", "/users/42"))
    """

    def __init__(
        self,
        router: Router,
        container: DependencyContainer | None = None,
        default_handler: RequestHandler | None = None,
        emitter: Emitter | None = None,
        response_prototype: Response | None = None,
    ):
        self._router = router
        self._container = container or DependencyContainer()
        self._response_prototype = response_prototype or Response()
        self._default_handler = default_handler or NotFoundHandler(self._response_prototype)
        self._emitter = emitter or StreamEmitter()
        self._pipeline = MiddlewarePipeline()
        self._routes: list[Route] = []

    @property
    def router(self) -> Router:
        return self._router

    @property
    def container(self) -> DependencyContainer:
        return self._container

    @property
    def default_handler(self) -> RequestHandler:
        return self._default_handler

    @property
    def emitter(self) -> Emitter:
        return self._emitter

    @property
    def response_prototype(self) -> Response:
        """Response that framework-built responses are derived from."""
        return self._response_prototype

    @property
    def pipeline(self) -> MiddlewarePipeline:
        return self._pipeline

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    def prepare_middleware(self, middleware: Any) -> Middleware:
        """Turn a middleware designation into a ``Middleware`` instance.

        Accepts middleware instances, controller designations
        (``"pkg.module.Class::method"`` or ``[Class, "method"]``), container
        service keys, lists of any of these (run as a nested pipeline) and
        ``(request, handler)`` callables.

        Raises:
            InvalidMiddlewareError: If the value cannot be used as middleware.
        """
        if isinstance(middleware, Middleware):
            return middleware
        if not isinstance(middleware, type) and hasattr(middleware, "process"):
            return CallableMiddleware(middleware.process)
        if isinstance(middleware, str) and middleware.find(SEPARATOR) > 0:
            return ControllerMiddleware(self._container, middleware)
        if isinstance(middleware, (list, tuple)) and ControllerMiddleware.accepts(middleware):
            return ControllerMiddleware(self._container, middleware)
        if isinstance(middleware, str):
            return LazyLoadingMiddleware(self._container, middleware)
        if isinstance(middleware, (list, tuple)):
            return MiddlewarePipeline([self.prepare_middleware(m) for m in middleware])
        if isinstance(middleware, type):
            if self._container.has(middleware):
                return LazyLoadingMiddleware(self._container, middleware)
            if issubclass(middleware, Middleware):
                return middleware()
        if callable(middleware) and not isinstance(middleware, type):
            return CallableMiddleware(middleware)
        raise InvalidMiddlewareError.for_value(middleware)

    def pipe(self, path_or_middleware: Any, middleware: Any = None) -> None:
        """Append middleware to the pipeline.

        Called with one argument the middleware runs for every request.
        Called as ``pipe("/admin", middleware)`` it only runs for paths at or
        beneath the prefix.
        """
        if middleware is None:
            self._pipeline.pipe(self.prepare_middleware(path_or_middleware))
            return

        prepared = self.prepare_middleware(middleware)
        if path_or_middleware in ("", "/"):
            self._pipeline.pipe(prepared)
        else:
            self._pipeline.pipe(PathMiddleware(path_or_middleware, prepared))

    def route(
        self,
        path: str,
        middleware: Any,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> Route:
        """Register a route.

        Args:
            path: Path template.
            middleware: Anything ``prepare_middleware`` accepts.
            methods: Allowed methods; None allows any method.
            name: Optional route name.

        Raises:
            DuplicateRouteError: If the path is already registered for any of
                the methods.
        """
        route = Route(path, self.prepare_middleware(middleware), methods, name)
        for existing in self._routes:
            if existing.overlaps(route):
                raise DuplicateRouteError(
                    f"Duplicate route detected; path '{path}' already answers "
                    f"one of the requested methods ({existing!r})"
                )

        self._router.add_route(route)
        self._routes.append(route)
        LOGGER.debug("Registered route", extra={"route": route.name, "path": path})
        return route

    def get(self, path: str, middleware: Any, name: str | None = None) -> Route:
        return self.route(path, middleware, ["GET"], name)

    def post(self, path: str, middleware: Any, name: str | None = None) -> Route:
        return self.route(path, middleware, ["POST"], name)

    def put(self, path: str, middleware: Any, name: str | None = None) -> Route:
        return self.route(path, middleware, ["PUT"], name)

    def patch(self, path: str, middleware: Any, name: str | None = None) -> Route:
        return self.route(path, middleware, ["PATCH"], name)

    def delete(self, path: str, middleware: Any, name: str | None = None) -> Route:
        return self.route(path, middleware, ["DELETE"], name)

    def any(self, path: str, middleware: Any, name: str | None = None) -> Route:
        return self.route(path, middleware, None, name)

    async def handle(self, request: Request) -> Response:
        """Run the request through the pipeline.

        Args:
            request: The incoming request.

        Returns:
            The response produced by the pipeline or the default handler.
        """
        return await self._pipeline.process(request, self._default_handler)

    async def run(self, request: Request) -> Response:
        """Handle the request and emit the response."""
        response = await self.handle(request)
        self._emitter.emit(response)
        return response
