"""Routing and dispatch stages of the pipeline.

``RouteMiddleware`` matches the request and records the result on it;
``DispatchMiddleware`` later runs the middleware of the matched route. Keeping
them separate lets other middleware run between the two, e.g. to check
authorization against the matched route.
"""

import logging
from http import HTTPStatus

from ..http import Request, Response
from ..router import RouteResult, Router
from .base import Middleware, RequestHandler

LOGGER = logging.getLogger(__name__)

# Attribute key used before RouteResult instances were stored under their
# type. Still populated for middleware that reads the old key.
LEGACY_ROUTE_RESULT_ATTRIBUTE = "route_result"


class RouteMiddleware(Middleware):
    """Matches the request against the router.

    Args:
        router: Router holding the application's routes.
        response_prototype: Response used to build 405 responses.
    """

    def __init__(self, router: Router, response_prototype: Response):
        self.router = router
        self.response_prototype = response_prototype

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        result = self.router.match(request)

        if result.is_failure:
            if result.is_method_failure:
                allowed = result.allowed_methods or []
                LOGGER.debug(
                    "Method not allowed",
                    extra={"method": request.method, "path": request.path, "allowed": allowed},
                )
                return self.response_prototype.clone().with_status(
                    HTTPStatus.METHOD_NOT_ALLOWED.value
                ).with_header("Allow", ",".join(allowed))
            return await handler.handle(request)

        request = request.with_attribute(RouteResult, result).with_attribute(
            LEGACY_ROUTE_RESULT_ATTRIBUTE, result
        )
        for name, value in result.matched_params.items():
            request = request.with_attribute(name, value)

        return await handler.handle(request)


class DispatchMiddleware(Middleware):
    """Runs the middleware of the route matched earlier in the pipeline."""

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        result = request.get_attribute(RouteResult)
        if result is None or not result.is_success or result.matched_route is None:
            return await handler.handle(request)

        return await result.matched_route.middleware.process(request, handler)
