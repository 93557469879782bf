"""Route definitions and the default path router."""

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import RouteNotFoundError
from .http import Request

if TYPE_CHECKING:
    from .middleware import Middleware

HTTP_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")

PLACEHOLDER = re.compile(r"\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<pattern>[^{}]+))?\}")


class Route:
    """A path bound to middleware for a set of methods.

    Args:
        path: Path template, e.g. ``/users/{id:\\d+}``.
        middleware: Middleware that handles matching requests.
        methods: Allowed methods; None allows any method.
        name: Route name used for URI generation. Defaults to the path,
            suffixed with the methods when they are restricted.
    """

    def __init__(
        self,
        path: str,
        middleware: "Middleware",
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ):
        self.path = path
        self.middleware = middleware
        self.methods: frozenset[str] | None = (
            frozenset(m.upper() for m in methods) if methods is not None else None
        )
        self.name = name or self._default_name()
        self.options: dict[str, Any] = {}

    def _default_name(self) -> str:
        if self.methods is None:
            return self.path
        return f"{self.path}^{':'.join(sorted(self.methods))}"

    @property
    def allows_any_method(self) -> bool:
        return self.methods is None

    def allows(self, method: str) -> bool:
        return self.methods is None or method.upper() in self.methods

    def overlaps(self, other: "Route") -> bool:
        if self.path != other.path:
            return False
        if self.methods is None or other.methods is None:
            return True
        return bool(self.methods & other.methods)

    def __repr__(self) -> str:
        methods = "*" if self.methods is None else ",".join(sorted(self.methods))
        return f"Route({self.path!r}, methods={methods}, name={self.name!r})"


class RouteResult:
    """Outcome of matching a request against a router."""

    def __init__(
        self,
        success: bool,
        route: Route | None = None,
        params: dict[str, str] | None = None,
        allowed_methods: frozenset[str] | None = None,
    ):
        self.success = success
        self.route = route
        self.params = params or {}
        self._allowed_methods = allowed_methods

    @classmethod
    def from_route(cls, route: Route, params: dict[str, str] | None = None) -> "RouteResult":
        return cls(True, route=route, params=params, allowed_methods=route.methods)

    @classmethod
    def from_route_failure(cls, methods: Iterable[str] | None = None) -> "RouteResult":
        """Build a failed result.

        Args:
            methods: Methods the path does allow. None signals a general
                failure (nothing matched the path at all).
        """
        allowed = frozenset(m.upper() for m in methods) if methods is not None else None
        return cls(False, allowed_methods=allowed)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success

    @property
    def is_method_failure(self) -> bool:
        return not self.success and self._allowed_methods is not None

    @property
    def allowed_methods(self) -> list[str] | None:
        if self._allowed_methods is None:
            return None
        return sorted(self._allowed_methods)

    @property
    def matched_route(self) -> Route | None:
        return self.route

    @property
    def matched_params(self) -> dict[str, str]:
        return dict(self.params)

    @property
    def matched_route_name(self) -> str | None:
        return self.route.name if self.route is not None else None


@runtime_checkable
class Router(Protocol):
    def add_route(self, route: Route) -> None:
        """Register a route with the router."""
        ...

    def match(self, request: Request) -> RouteResult:
        """Match a request against the registered routes."""
        ...

    def generate_uri(self, name: str, **params: Any) -> str:
        """Build the path of a named route."""
        ...


class PathRouter:
    """Router matching path templates in registration order.

    Placeholders are written ``{name}`` (one path segment) or
    ``{name:regex}``. When a path matches but none of its routes allows the
    request method, the result is a method failure carrying every method the
    path does allow.
    """

    def __init__(self) -> None:
        self.routes: list[Route] = []
        self._patterns: dict[str, re.Pattern[str]] = {}

    def add_route(self, route: Route) -> None:
        if route.path not in self._patterns:
            self._patterns[route.path] = self.compile(route.path)
        self.routes.append(route)

    @staticmethod
    def compile(path: str) -> re.Pattern[str]:
        regex = ""
        position = 0
        for placeholder in PLACEHOLDER.finditer(path):
            regex += re.escape(path[position : placeholder.start()])
            pattern = placeholder.group("pattern") or "[^/]+"
            regex += f"(?P<{placeholder.group('name')}>{pattern})"
            position = placeholder.end()
        regex += re.escape(path[position:])
        return re.compile(f"^{regex}$")

    def match(self, request: Request) -> RouteResult:
        allowed: set[str] = set()
        path_matched = False
        for route in self.routes:
            found = self._patterns[route.path].match(request.path)
            if found is None:
                continue
            path_matched = True
            if route.allows(request.method):
                return RouteResult.from_route(route, found.groupdict())
            allowed.update(route.methods or ())

        if path_matched:
            return RouteResult.from_route_failure(allowed)
        return RouteResult.from_route_failure(None)

    def generate_uri(self, name: str, **params: Any) -> str:
        for route in self.routes:
            if route.name == name:
                return PLACEHOLDER.sub(lambda m: str(params[m.group("name")]), route.path)
        raise RouteNotFoundError(f"No route named '{name}' is registered")
