"""Helpers for status codes and class loading."""

import importlib
from functools import lru_cache
from typing import Any

from .http import Response


def _is_error_status(status: object) -> bool:
    return isinstance(status, int) and not isinstance(status, bool) and 400 <= status < 600


def get_status_code(error: BaseException, response: Response) -> int:
    """Pick the status code to report for an error.

    The error's own ``status_code`` (or ``code``) attribute wins when it is
    a 4xx/5xx code. Otherwise an error status already set on the response is
    kept, and anything else becomes 500.
    """
    for attribute in ("status_code", "code"):
        status = getattr(error, attribute, None)
        if _is_error_status(status):
            return int(status)  # type: ignore[arg-type]

    if _is_error_status(response.status_code):
        return response.status_code
    return 500


@lru_cache(maxsize=256)
def load_type(qualified_name: str) -> type[Any]:
    """Load a class from its dotted path.

    Args:
        qualified_name: The fully qualified name (module.ClassName).

    Returns:
        The loaded class.

    Raises:
        ImportError: If the module cannot be imported or does not define a
            class with that name.

    Example:
        >>> load_type("switchyard.http.Response").__name__
        'Response'
    """
    module_path, _, class_name = qualified_name.rpartition(".")
    if not module_path or not class_name:
        raise ImportError(f"Invalid qualified name: {qualified_name}")

    module = importlib.import_module(module_path)
    try:
        loaded = getattr(module, class_name)
    except AttributeError:
        raise ImportError(f"Module '{module_path}' has no attribute '{class_name}'") from None
    if not isinstance(loaded, type):
        raise ImportError(f"'{qualified_name}' is not a class")
    return loaded
