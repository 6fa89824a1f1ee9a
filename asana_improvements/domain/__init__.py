"""Domain layer for Asana Improvements.

Pure logic (due date resolution, Result types) and the protocols the engine
uses to reach the page and the durable store. Nothing here performs I/O.
"""

from asana_improvements.domain.dates import DateResolver, annotate, is_annotated
from asana_improvements.domain.ports import (
    ChangeRecord,
    InvalidSelectorError,
    KeyValueStore,
    PageDocument,
    PageElement,
    Subscription,
)
from asana_improvements.domain.shared import Err, Ok, Result

__all__ = [
    "DateResolver",
    "annotate",
    "is_annotated",
    "ChangeRecord",
    "InvalidSelectorError",
    "KeyValueStore",
    "PageDocument",
    "PageElement",
    "Subscription",
    "Ok",
    "Err",
    "Result",
]
