"""Logging middleware for request tracing."""

import logging

from ..http import Request, Response
from .base import Middleware, RequestHandler

LOGGER = logging.getLogger(__name__)


class LoggingMiddleware(Middleware):
    """Middleware that logs each request and the status it produced.

    Only the method, path and status code are logged; headers and bodies
    are left out to avoid exposing credentials or personal data.

    Attributes:
        level: The numeric logging level (e.g., logging.INFO,
            logging.DEBUG).

    Examples:
        >>> app.pipe(LoggingMiddleware("INFO"))
    """

    def __init__(self, level: str = "INFO"):
        """Initialize the logging middleware.

        Args:
            level: String representation of the log level (e.g.,
                "INFO", "DEBUG"). Case-insensitive.
        """
        self.level = getattr(logging, level.upper())

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        extra = {"method": request.method, "path": request.path}
        LOGGER.log(self.level, "Received Request", extra=extra)

        response = await handler.handle(request)

        LOGGER.log(self.level, "Sent Response", extra={**extra, "status": response.status_code})
        return response
