"""Result type for operations whose failure is an expected outcome.

Best-effort lookups return a Result so callers decide between a default
and a hard failure explicitly instead of catching exceptions.
"""

from __future__ import annotations

from typing import Any, Optional, TypedDict, TypeVar

T = TypeVar("T")


class Result(TypedDict):
    """Outcome of an operation that can fail.

    Attributes:
        ok: True if the operation succeeded
        value: The successful value (None if failed)
        error: Error message (None if succeeded)
    """

    ok: bool
    value: Optional[Any]
    error: Optional[str]


def success(value: T) -> Result:
    return Result(ok=True, value=value, error=None)


def failure(error: str) -> Result:
    return Result(ok=False, value=None, error=error)


def from_exception(exc: BaseException) -> Result:
    """Create a failed result from an exception, keeping its type name."""
    return failure(f"{type(exc).__name__}: {exc}")


def unwrap_or(result: Result, default: Any) -> Any:
    if result["ok"]:
        return result["value"]
    return default
