"""Response emitters."""

import sys
from typing import Protocol, TextIO, runtime_checkable

from .http import Response


@runtime_checkable
class Emitter(Protocol):
    def emit(self, response: Response) -> bool:
        """Send the response to the client.

        Returns:
            True if the response was emitted.
        """
        ...


class StreamEmitter:
    """Writes the status line, headers and body to a text stream."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def emit(self, response: Response) -> bool:
        stream = self.stream or sys.stdout
        stream.write(f"HTTP/1.1 {response.status_code} {response.reason_phrase}".rstrip() + "\r\n")
        for name, value in response.headers.items():
            stream.write(f"{name}: {value}\r\n")
        stream.write("\r\n")
        stream.write(response.body.getvalue())
        stream.flush()
        return True
