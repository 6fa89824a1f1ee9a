"""Due date domain.

Key Types:
    DateResolver - Parses due date labels and measures remaining days

Functions:
    is_annotated - Detects labels that already carry a days suffix
    annotate - Builds the "<label> (<n> days)" text
"""

from .resolver import (
    ANNOTATION_MARKER,
    SECONDS_PER_DAY,
    Clock,
    DateResolver,
    annotate,
    is_annotated,
)

__all__ = [
    "ANNOTATION_MARKER",
    "SECONDS_PER_DAY",
    "Clock",
    "DateResolver",
    "annotate",
    "is_annotated",
]
