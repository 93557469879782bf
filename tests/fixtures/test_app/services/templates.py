"""Template renderer double that records what it was asked to render."""

from collections.abc import Mapping
from typing import Any


class RecordingRenderer:
    def __init__(self, output: str = "rendered") -> None:
        self.output = output
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, name: str, params: Mapping[str, Any]) -> str:
        self.calls.append((name, dict(params)))
        return self.output
