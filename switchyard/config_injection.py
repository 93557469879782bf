"""Seed an application's routes and pipeline from configuration."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .config import ApplicationConfig

if TYPE_CHECKING:
    from .application import Application

LOGGER = logging.getLogger(__name__)


def _as_config(config: Mapping[str, Any] | ApplicationConfig) -> ApplicationConfig:
    if isinstance(config, ApplicationConfig):
        return config
    return ApplicationConfig.from_mapping(config)


def inject_pipeline_from_config(
    app: "Application", config: Mapping[str, Any] | ApplicationConfig
) -> None:
    """Pipe every ``middleware_pipeline`` entry into the application.

    Entries are piped by descending priority; entries sharing a priority
    keep the order they were configured in.

    Raises:
        ConfigurationError: If the configuration has an invalid shape.
    """
    entries = _as_config(config).middleware_pipeline
    # sorted() is stable, so equal priorities keep their configured order
    for entry in sorted(entries, key=lambda e: e.priority, reverse=True):
        if entry.path:
            app.pipe(entry.path, entry.middleware)
        else:
            app.pipe(entry.middleware)
        LOGGER.debug(
            "Piped middleware from configuration",
            extra={"path": entry.path, "priority": entry.priority},
        )


def inject_routes_from_config(
    app: "Application", config: Mapping[str, Any] | ApplicationConfig
) -> None:
    """Register every ``routes`` entry with the application.

    Raises:
        ConfigurationError: If the configuration has an invalid shape.
        DuplicateRouteError: If two entries claim the same path and method.
    """
    for entry in _as_config(config).routes or []:
        route = app.route(entry.path, entry.middleware, entry.allowed_methods, entry.name)
        route.options.update(entry.options)
