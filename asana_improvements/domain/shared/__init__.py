"""Shared domain utilities.

Example usage:
    >>> from asana_improvements.domain.shared import Ok, Err, Result, is_ok
    >>>
    >>> def read_key(store: dict, key: str) -> Result[str, str]:
    ...     if key not in store:
    ...         return Err(f"Missing key: {key}")
    ...     return Ok(store[key])
"""

from asana_improvements.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
)

__all__ = [
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
]
