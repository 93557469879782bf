"""HTTP message types passed through the middleware pipeline.

Requests and responses are immutable: every ``with_*`` method returns a
modified copy. The response body is the exception, it is a mutable stream
that copies made through ``with_status``/``with_header`` keep sharing, so a
middleware can set the status and then write the body.
"""

import io
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any
from urllib.parse import urlsplit


class Stream:
    """In-memory response body."""

    def __init__(self, content: str = ""):
        self._buffer = io.StringIO()
        self._buffer.write(content)

    def write(self, text: str) -> int:
        return self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def __str__(self) -> str:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"Stream({self.getvalue()!r})"


@dataclass(frozen=True)
class Request:
    """An incoming server request.

    Attributes:
        method: Upper-case HTTP method.
        uri: Request URI as received (path plus optional query string).
        headers: Request headers.
        attributes: Values attached by middleware, keyed by string or type.
        body: Raw request body.
    """

    method: str = "GET"
    uri: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    attributes: dict[Any, Any] = field(default_factory=dict)
    body: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    @property
    def path(self) -> str:
        return urlsplit(self.uri).path or "/"

    @property
    def query(self) -> str:
        return urlsplit(self.uri).query

    def get_attribute(self, key: Any, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def with_attribute(self, key: Any, value: Any) -> "Request":
        return replace(self, attributes={**self.attributes, key: value})

    def get_header(self, name: str, default: str | None = None) -> str | None:
        return _find_header(self.headers, name, default)


@dataclass(frozen=True)
class Response:
    """An outgoing response.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers; lookups are case-insensitive.
        body: Mutable body stream shared by copies made with ``with_*``.
        reason: Custom reason phrase, empty to use the standard one.
    """

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Stream = field(default_factory=Stream)
    reason: str = ""

    @property
    def reason_phrase(self) -> str:
        if self.reason:
            return self.reason
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return ""

    def with_status(self, status_code: int, reason: str = "") -> "Response":
        return replace(self, status_code=status_code, reason=reason)

    def with_header(self, name: str, value: str) -> "Response":
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)

    def get_header(self, name: str, default: str | None = None) -> str | None:
        return _find_header(self.headers, name, default)

    def clone(self) -> "Response":
        """Copy status and headers onto a response with an empty body."""
        return replace(self, headers=dict(self.headers), body=Stream())


def _find_header(headers: dict[str, str], name: str, default: str | None) -> str | None:
    for key, value in headers.items():
        if key.lower() == name.lower():
            return value
    return default
