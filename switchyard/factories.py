"""Factories assembling framework services from a container.

Each factory is a callable taking the container and returning the service,
so it can be registered directly:

    >>> container.register_singleton(Application, ApplicationFactory())

Lookups are made fresh on every call; optional services that are missing
fall back to defaults and never raise.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from . import keys
from .application import Application
from .config import ApplicationConfig, ErrorHandlerSettings, flatten_config
from .config_injection import inject_pipeline_from_config, inject_routes_from_config
from .container import DependencyContainer
from .http import Response
from .middleware import (
    DispatchMiddleware,
    ErrorHandlerMiddleware,
    ErrorResponseGenerator,
    Middleware,
    RouteMiddleware,
)
from .router import PathRouter, Router

LOGGER = logging.getLogger(__name__)


def get_config(container: DependencyContainer) -> dict[str, Any]:
    if not container.has(keys.CONFIG):
        return {}
    return flatten_config(container.get(keys.CONFIG))


def get_option(config: Mapping[str, Any], section: str, name: str) -> Any:
    """Read ``config[section][name]``, treating a non-mapping section as empty."""
    options = config.get(section)
    if not isinstance(options, Mapping):
        return None
    return options.get(name)


def get_response_prototype(container: DependencyContainer) -> Response | None:
    """Fetch the registered response prototype, invoking it if it is a factory."""
    if not container.has(keys.RESPONSE):
        return None
    response = container.get(keys.RESPONSE)
    return response() if callable(response) else response


class ApplicationFactory:
    """Creates an Application from the services in a container.

    The following services are used when registered, canonical key first:

    - ``"config"``: mapping with routes and pipeline configuration. Unless
      ``app.programmatic_pipeline`` is set, it seeds the application.
    - ``Router`` / ``"router"``: falls back to a new ``PathRouter``.
    - ``"switchyard.default_handler"``: handler used when the pipeline is
      exhausted. The application defaults to a ``NotFoundHandler``.
    - ``Emitter`` / ``"emitter"``: the application defaults to a
      ``StreamEmitter``.
    - ``RouteMiddleware`` / ``"route_middleware"`` and ``DispatchMiddleware``
      / ``"dispatch_middleware"``: the routing and dispatch stages piped when
      only routes are configured.
    - ``Response``: the prototype given to a directly built
      ``RouteMiddleware``; may be a callable returning a response.
    """

    def __call__(self, container: DependencyContainer) -> Application:
        config = get_config(container)

        router = container.first_available(*keys.ROUTER)
        if router is None:
            LOGGER.debug("No router registered, using PathRouter")
            router = PathRouter()

        default_handler = container.first_available(keys.DEFAULT_HANDLER)
        emitter = container.first_available(*keys.EMITTER)

        app = Application(router, container, default_handler, emitter)

        if not get_option(config, "app", "programmatic_pipeline"):
            self.inject_routes_and_pipeline(container, router, app, config)

        return app

    def inject_routes_and_pipeline(
        self,
        container: DependencyContainer,
        router: Router,
        app: Application,
        config: dict[str, Any],
    ) -> None:
        """Seed routes and the pipeline of ``app`` from configuration.

        Nothing happens unless ``middleware_pipeline`` is non-empty or
        ``routes`` is a list. When only routes are configured, the routing
        and dispatch stages are piped first so the routes are reachable.
        """
        has_pipeline = bool(config.get("middleware_pipeline"))
        has_routes = isinstance(config.get("routes"), list)
        if not has_pipeline and not has_routes:
            return

        app_config = ApplicationConfig.from_mapping(config)

        if not has_pipeline:
            app.pipe(self.get_routing_middleware(container, router, app))
            app.pipe(self.get_dispatch_middleware(container))
            LOGGER.debug("Piped default routing and dispatch middleware")

        inject_routes_from_config(app, app_config)
        inject_pipeline_from_config(app, app_config)

    def get_routing_middleware(
        self, container: DependencyContainer, router: Router, app: Application
    ) -> Middleware:
        """Discover the route middleware, or create one for ``router``."""
        middleware = container.first_available(*keys.ROUTE_MIDDLEWARE)
        if middleware is not None:
            return middleware

        prototype = get_response_prototype(container)
        if prototype is None:
            prototype = app.response_prototype
        return RouteMiddleware(router, prototype)

    def get_dispatch_middleware(self, container: DependencyContainer) -> Middleware:
        """Discover the dispatch middleware, or create one."""
        middleware = container.first_available(*keys.DISPATCH_MIDDLEWARE)
        return middleware if middleware is not None else DispatchMiddleware()


class ErrorResponseGeneratorFactory:
    """Creates an ErrorResponseGenerator.

    ``debug`` and ``error_handler.template_error`` are read from the
    ``"config"`` service, falling back to ``ErrorHandlerSettings`` (and so to
    ``SWITCHYARD_*`` environment variables). A ``TemplateRenderer`` (or
    ``"template_renderer"``) service enables templated error pages.
    """

    def __call__(self, container: DependencyContainer) -> ErrorResponseGenerator:
        config = get_config(container)

        overrides: dict[str, Any] = {}
        if "debug" in config:
            overrides["debug"] = config["debug"]
        template = get_option(config, "error_handler", "template_error")
        if template:
            overrides["template_error"] = template

        settings = ErrorHandlerSettings(**overrides)
        renderer = container.first_available(*keys.TEMPLATE_RENDERER)

        return ErrorResponseGenerator(
            debug=settings.debug,
            renderer=renderer,
            template=settings.template_error,
        )


class ErrorHandlerFactory:
    """Creates the ErrorHandlerMiddleware placed first in the pipeline.

    Uses a registered ``ErrorResponseGenerator`` when there is one, otherwise
    builds it with ``ErrorResponseGeneratorFactory``. Every error starts from
    an empty copy of the registered ``Response`` prototype, or from a new
    ``Response``.
    """

    def __call__(self, container: DependencyContainer) -> ErrorHandlerMiddleware:
        generator = container.first_available(*keys.ERROR_RESPONSE_GENERATOR)
        if generator is None:
            generator = ErrorResponseGeneratorFactory()(container)

        return ErrorHandlerMiddleware(self.response_factory(container), generator)

    @staticmethod
    def response_factory(container: DependencyContainer) -> Callable[[], Response]:
        def factory() -> Response:
            prototype = get_response_prototype(container)
            return prototype.clone() if prototype is not None else Response()

        return factory
