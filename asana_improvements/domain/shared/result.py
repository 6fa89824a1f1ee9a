"""Result monad for explicit error handling at I/O boundaries.

Storage and configuration operations can fail for reasons outside the
engine's control (missing files, permissions, corrupt JSON). Instead of
raising, they return either an Ok carrying the value or an Err carrying a
human-readable message, and the caller decides how to degrade.

Example usage:
    >>> def parse_flag(raw: str) -> Result[bool, str]:
    ...     if raw not in ("true", "false"):
    ...         return Err(f"Not a boolean flag: {raw!r}")
    ...     return Ok(raw == "true")
    ...
    >>> result = parse_flag("true")
    >>> if is_ok(result):
    ...     print(f"Hidden: {result.value}")
    Hidden: True
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is successful."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is an error."""
    return isinstance(result, Err)

