"""Error handling: turning exceptions and unmatched requests into responses."""

import logging
import traceback
from collections.abc import Callable, Iterator
from typing import Any

from ..http import Request, Response
from ..template import TemplateRenderer
from ..utils import get_status_code
from .base import Middleware, RequestHandler

LOGGER = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"

STACK_TRACE_TEMPLATE = """{type} raised in file {file} line {line}:
Message: {message}
Stack Trace:
{trace}
"""


def iter_error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield the error followed by each error that caused it.

    Follows ``__cause__`` and, unless suppressed, ``__context__``. An error
    already seen ends the walk.
    """
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def _origin(error: BaseException) -> tuple[str, int]:
    frames = traceback.extract_tb(error.__traceback__)
    if not frames:
        return "<unknown>", 0
    return frames[-1].filename, frames[-1].lineno or 0


def format_stack_trace(error: BaseException) -> str:
    """Render one block per error in the cause chain, outermost first."""
    blocks = []
    for link in iter_error_chain(error):
        filename, line = _origin(link)
        blocks.append(
            STACK_TRACE_TEMPLATE.format(
                type=type(link).__name__,
                file=filename,
                line=line,
                message=str(link),
                trace="".join(traceback.format_tb(link.__traceback__)),
            )
        )
    return "\n".join(blocks)


class ErrorResponseGenerator:
    """Builds the response sent to the client when an error escapes.

    With a template renderer the configured template is rendered with the
    request, response, URI, status and reason phrase; the error itself is
    only passed to the template in debug mode. Without a renderer a generic
    plain-text message is written, followed by the stack trace of the
    error and its causes in debug mode.

    Args:
        debug: Whether error details may be exposed.
        renderer: Optional renderer for templated error pages.
        template: Template name rendered by ``renderer``.
    """

    TEMPLATE_DEFAULT = "error::error"

    def __init__(
        self,
        debug: bool = False,
        renderer: TemplateRenderer | None = None,
        template: str = TEMPLATE_DEFAULT,
    ):
        self.debug = bool(debug)
        self.renderer = renderer
        self.template = template

    def __call__(self, error: BaseException, request: Request, response: Response) -> Response:
        return self.handle(error, request, response)

    def handle(self, error: BaseException, request: Request, response: Response) -> Response:
        response = response.with_status(get_status_code(error, response))

        if self.renderer is not None:
            return self._templated_response(self.renderer, error, request, response)
        return self._default_response(error, response)

    def _templated_response(
        self,
        renderer: TemplateRenderer,
        error: BaseException,
        request: Request,
        response: Response,
    ) -> Response:
        data: dict[str, Any] = {
            "response": response,
            "request": request,
            "uri": str(request.uri),
            "status": response.status_code,
            "reason": response.reason_phrase,
        }
        if self.debug:
            data["error"] = error

        response.body.write(renderer.render(self.template, data))
        return response

    def _default_response(self, error: BaseException, response: Response) -> Response:
        message = DEFAULT_ERROR_MESSAGE
        if self.debug:
            message += "; stack trace:\n\n" + format_stack_trace(error)

        response.body.write(message)
        return response


class ErrorHandlerMiddleware(Middleware):
    """Outermost middleware converting uncaught exceptions into responses.

    Args:
        response_factory: Returns a fresh response for each error.
        generator: Turns the error into the final response.
    """

    def __init__(
        self,
        response_factory: Callable[[], Response],
        generator: Callable[[BaseException, Request, Response], Response] | None = None,
    ):
        self.response_factory = response_factory
        self.generator = generator or ErrorResponseGenerator()

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        try:
            return await handler.handle(request)
        except Exception as error:
            LOGGER.exception(
                "Unhandled error while processing request",
                extra={"method": request.method, "path": request.path},
            )
            return self.generator(error, request, self.response_factory())


class NotFoundHandler:
    """Final handler used when nothing in the pipeline produced a response."""

    def __init__(self, response_prototype: Response):
        self.response_prototype = response_prototype

    async def handle(self, request: Request) -> Response:
        response = self.response_prototype.clone().with_status(404)
        response.body.write(f"Cannot {request.method} {request.path}")
        return response
