"""Template rendering contract used by error pages."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TemplateRenderer(Protocol):
    """Renders a named template.

    Names use the ``namespace::template`` form, e.g. ``error::404``.
    """

    def render(self, name: str, params: Mapping[str, Any]) -> str: ...
