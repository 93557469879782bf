"""Exceptions raised while wiring and running an application."""


class SwitchyardError(Exception):
    """Base class for all framework errors."""

    pass


class InvalidMiddlewareError(SwitchyardError):
    """Raised when a value cannot be turned into middleware.

    This covers controller designations that are not a callable
    ``[class, method]`` pair as well as values of unsupported types passed
    to ``Application.pipe`` or ``Application.route``.
    """

    CONTROLLER_FORMS = (
        "A controller-middleware must be defined as a callable pair "
        "[ClassName, 'method'] or a callable string "
        "'package.module.ClassName::method'"
    )

    @classmethod
    def for_controller(cls, middleware: object) -> "InvalidMiddlewareError":
        return cls(f"{cls.CONTROLLER_FORMS}; got {middleware!r}")

    @classmethod
    def for_value(cls, middleware: object) -> "InvalidMiddlewareError":
        return cls(
            f"Unable to create middleware from value of type {type(middleware).__name__}: "
            f"{middleware!r}"
        )


class DuplicateRouteError(SwitchyardError):
    """Raised when a path is registered twice for overlapping methods."""

    pass


class RouteNotFoundError(SwitchyardError):
    """Raised when generating a URI for a route name that does not exist."""

    pass


class ConfigurationError(SwitchyardError):
    """Raised when application configuration has an invalid shape."""

    pass
