"""Middleware that invokes a method on a controller object."""

import logging
import threading
from typing import TYPE_CHECKING, Any

from ..exceptions import InvalidMiddlewareError
from ..http import Request, Response
from ..utils import load_type
from .base import Middleware, RequestHandler, maybe_await

if TYPE_CHECKING:
    from ..container import DependencyContainer

LOGGER = logging.getLogger(__name__)

SEPARATOR = "::"


def _normalize(middleware: Any) -> Any:
    # "pkg.module.Class::method" -> ["pkg.module.Class", "method"]; a leading
    # separator leaves nothing to name the class and is not split.
    if isinstance(middleware, str) and middleware.find(SEPARATOR) > 0:
        return middleware.split(SEPARATOR, 1)
    return middleware


def _controller_class(target: Any) -> type[Any] | None:
    """Class used to check that the method exists on an unresolved target."""
    if isinstance(target, str):
        return load_type(target)
    if isinstance(target, type):
        return target
    return None


class ControllerMiddleware(Middleware):
    """Calls ``method`` on a controller and returns its result as the response.

    The controller can be given as an instance, a class, or the dotted path of
    a class, either as a ``[controller, "method"]`` pair or as the string
    ``"package.module.Class::method"``. Classes are resolved on the first
    request: from the container when it has a service registered under the
    same key (the dotted path or the class), otherwise by calling the class
    with no arguments. The resolved instance is reused for every later
    request.

    This middleware always produces the response; the next handler is never
    called.

    Args:
        container: Container queried for the controller service.
        middleware: The controller designation.

    Raises:
        InvalidMiddlewareError: If the designation is not a pair naming a
            callable method, including when a dotted path cannot be imported.

    Examples:
        >>> ControllerMiddleware(container, "myapp.controllers.Users::show")
        >>> ControllerMiddleware(container, [UsersController, "show"])
        >>> ControllerMiddleware(container, [UsersController(repo), "show"])
    """

    def __init__(self, container: "DependencyContainer", middleware: Any):
        self.container = container
        self.controller: Any = None
        self.method: str = ""
        self._resolved = False
        self._lock = threading.Lock()
        self.resolve(middleware)

    @classmethod
    def accepts(cls, middleware: Any) -> bool:
        """Check whether ``middleware`` is a valid controller designation."""
        try:
            cls._validate(_normalize(middleware))
        except InvalidMiddlewareError:
            return False
        return True

    @staticmethod
    def _validate(middleware: Any) -> tuple[Any, str]:
        if not isinstance(middleware, (list, tuple)) or len(middleware) != 2:
            raise InvalidMiddlewareError.for_controller(middleware)

        target, method = middleware
        if not isinstance(method, str) or not method or target is None:
            raise InvalidMiddlewareError.for_controller(middleware)

        try:
            owner = _controller_class(target)
        except ImportError as exc:
            raise InvalidMiddlewareError.for_controller(middleware) from exc

        if not callable(getattr(owner if owner is not None else target, method, None)):
            raise InvalidMiddlewareError.for_controller(middleware)
        return target, method

    def resolve(self, middleware: Any) -> None:
        """Split the designation into controller and method name."""
        self.controller, self.method = self._validate(_normalize(middleware))
        # Instances are used as given; classes and dotted paths wait for the
        # first request
        self._resolved = not isinstance(self.controller, (str, type))

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def _resolve_controller(self) -> Any:
        with self._lock:
            if self.is_resolved:
                return self.controller

            key = self.controller
            # Try pulling from the container and fall back to direct
            # instantiation
            if self.container.has(key):
                LOGGER.debug("Resolving controller from container", extra={"controller": str(key)})
                self.controller = self.container.get(key)
            else:
                LOGGER.debug("Instantiating controller", extra={"controller": str(key)})
                controller_type = load_type(key) if isinstance(key, str) else key
                self.controller = controller_type()
            self._resolved = True
            return self.controller

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        controller = self._resolve_controller()
        return await maybe_await(getattr(controller, self.method)(request))
