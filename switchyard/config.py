"""Configuration models validated with pydantic and pydantic-settings.

Application configuration is a plain mapping registered in the container
under ``"config"``. The models below describe the keys the framework reads;
any other keys are preserved for application code.

Example:
    >>> config = {
    ...     "debug": True,
    ...     "app": {"programmatic_pipeline": False},
    ...     "routes": [
    ...         {"path": "/", "middleware": "myapp.controllers.Home::index",
    ...          "allowed_methods": ["GET"], "name": "home"},
    ...     ],
    ...     "middleware_pipeline": [
    ...         {"middleware": "myapp.middleware.Auth", "path": "/admin", "priority": 10},
    ...     ],
    ... }
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError

CONFIG_KEY = "config"


class AppOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Disables route and pipeline injection from configuration; the
    # application is then wired in code.
    programmatic_pipeline: bool = False


class ErrorHandlerOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    template_error: str | None = None


class PipelineEntry(BaseModel):
    """One stage of ``middleware_pipeline``.

    Attributes:
        middleware: Anything ``Application.prepare_middleware`` accepts.
        path: Optional path prefix the stage is restricted to.
        priority: Higher priorities are piped first. Entries with equal
            priority keep their configured order.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    middleware: Any
    path: str | None = None
    priority: int = 1


class RouteEntry(BaseModel):
    """One entry of ``routes``.

    Attributes:
        path: Path template.
        middleware: Anything ``Application.prepare_middleware`` accepts.
        allowed_methods: Allowed methods; None allows any method.
        name: Optional route name.
        options: Free-form options attached to the route.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    path: str
    middleware: Any
    allowed_methods: list[str] | None = None
    name: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)


class ApplicationConfig(BaseModel):
    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    debug: bool = False
    app: AppOptions = Field(default_factory=AppOptions)
    error_handler: ErrorHandlerOptions = Field(default_factory=ErrorHandlerOptions)
    middleware_pipeline: list[PipelineEntry] = Field(default_factory=list)
    routes: list[RouteEntry] | None = None

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "ApplicationConfig":
        """Validate a configuration mapping.

        Raises:
            ConfigurationError: If a recognized key has an invalid shape.
        """
        try:
            return cls.model_validate(dict(config))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid application configuration: {exc}") from exc


class ErrorHandlerSettings(BaseSettings):
    """Error page settings read from the environment.

    Values can be set via environment variables with the SWITCHYARD_
    prefix, e.g. ``SWITCHYARD_DEBUG=1``. Values passed explicitly, such as
    those taken from the application configuration, take precedence.

    Attributes:
        debug: Whether error details are exposed in responses.
        template_error: Template rendered for error pages.
    """

    debug: bool = False
    template_error: str = "error::error"

    model_config = {"env_prefix": "SWITCHYARD_"}


def flatten_config(config: Any) -> dict[str, Any]:
    """Return configuration as a plain dict.

    Accepts dicts, other mappings (e.g. ``ChainMap`` or
    ``MappingProxyType``) and pydantic models. Anything else is treated as
    empty configuration.
    """
    if isinstance(config, dict):
        return config
    if isinstance(config, BaseModel):
        return config.model_dump()
    if isinstance(config, Mapping):
        return dict(config)
    return {}
