"""Exception-isolated element lookup.

ElementLocator is the only component that queries the page. Every failure
(empty or malformed selector, a misbehaving page implementation) is logged
and turned into None or an empty list, so callers never need a try block
around a lookup.
"""

import logging

from asana_improvements.domain.ports import InvalidSelectorError, PageDocument, PageElement

logger = logging.getLogger(__name__)


def _is_valid_selector(selector: object) -> bool:
    return isinstance(selector, str) and bool(selector.strip())


class ElementLocator:
    """Safe query surface over a PageDocument."""

    def __init__(self, document: PageDocument) -> None:
        self._document = document

    def one(self, selector: str, scope: PageElement | None = None) -> PageElement | None:
        """Find the first element matching ``selector``.

        Args:
            selector: CSS selector.
            scope: Element whose descendants are searched; the whole
                document when omitted.

        Returns:
            The matching element, or None if nothing matches or the lookup failed.
        """
        if not _is_valid_selector(selector):
            logger.warning(f"Invalid selector provided: {selector!r}")
            return None

        try:
            if scope is None:
                return self._document.query_one(selector)
            return scope.query_one(selector)
        except InvalidSelectorError as e:
            logger.warning(f"Error in one({selector!r}): {e}")
        except Exception as e:
            logger.error(f"Unexpected error in one({selector!r}): {e}")
        return None

    def all(self, selector: str, scope: PageElement | None = None) -> list[PageElement]:
        """Find every element matching ``selector``; never returns None."""
        if not _is_valid_selector(selector):
            logger.warning(f"Invalid selector provided: {selector!r}")
            return []

        try:
            if scope is None:
                return list(self._document.query_all(selector))
            return list(scope.query_all(selector))
        except InvalidSelectorError as e:
            logger.warning(f"Error in all({selector!r}): {e}")
        except Exception as e:
            logger.error(f"Unexpected error in all({selector!r}): {e}")
        return []

    def closest(self, element: PageElement, selector: str) -> PageElement | None:
        """Find the nearest ancestor-or-self of ``element`` matching ``selector``."""
        if not _is_valid_selector(selector):
            logger.warning(f"Invalid selector provided: {selector!r}")
            return None

        try:
            return element.closest(selector)
        except InvalidSelectorError as e:
            logger.warning(f"Error in closest({selector!r}): {e}")
        except Exception as e:
            logger.error(f"Unexpected error in closest({selector!r}): {e}")
        return None
