"""Interfaces to the outside world.

The engine never touches a concrete page or storage backend. It talks to
these protocols, which the infrastructure layer implements (lxml-backed page,
JSON file store) and tests replace with in-memory doubles.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from asana_improvements.domain.shared import Result


class InvalidSelectorError(ValueError):
    """Raised by a page surface when a CSS selector cannot be compiled."""


ChangeKind = Literal["added", "removed", "text"]


@dataclass(frozen=True)
class ChangeRecord:
    """A single structural change reported by a page.

    Attributes:
        kind: What happened to the target's children.
        target: The element whose child list or text changed.
    """

    kind: ChangeKind
    target: "PageElement"


ChangeCallback = Callable[[list[ChangeRecord]], None]


@runtime_checkable
class Subscription(Protocol):
    """Handle returned by PageDocument.observe."""

    @property
    def active(self) -> bool: ...

    def disconnect(self) -> None:
        """Stop delivering notifications. Safe to call more than once."""
        ...


@runtime_checkable
class PageElement(Protocol):
    """Minimal element surface the transforms rely on.

    Query methods may raise InvalidSelectorError; everything else is
    expected to succeed on a connected element.
    """

    @property
    def tag(self) -> str: ...

    @property
    def element_id(self) -> str | None: ...

    @property
    def text(self) -> str: ...

    @text.setter
    def text(self, value: str) -> None: ...

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def has_class(self, name: str) -> bool: ...

    def add_class(self, *names: str) -> None: ...

    def get_style(self, name: str) -> str | None: ...

    def set_style(self, name: str, value: str | None) -> None: ...

    def bounding_box(self) -> tuple[float, float]:
        """Rendered (width, height); zero when the element is not displayed."""
        ...

    def click(self) -> None: ...

    def add_click_listener(self, listener: Callable[[], None]) -> None: ...

    def append(self, child: "PageElement") -> None: ...

    def remove(self) -> None: ...

    def query_one(self, selector: str) -> "PageElement | None": ...

    def query_all(self, selector: str) -> list["PageElement"]: ...

    def closest(self, selector: str) -> "PageElement | None": ...


@runtime_checkable
class PageDocument(Protocol):
    """The live document the host application renders into."""

    def query_one(self, selector: str) -> PageElement | None: ...

    def query_all(self, selector: str) -> list[PageElement]: ...

    def create_element(self, tag: str) -> PageElement: ...

    def ensure_head(self) -> PageElement:
        """Return the document head, creating it when missing."""
        ...

    def observe(self, callback: ChangeCallback) -> Subscription:
        """Report every structural change inside the body to ``callback``."""
        ...


@runtime_checkable
class KeyValueStore(Protocol):
    """Durable string key/value storage scoped to one browsing profile."""

    def get_item(self, key: str) -> Result[str | None, str]: ...

    def set_item(self, key: str, value: str) -> Result[None, str]: ...

    def remove_item(self, key: str) -> Result[None, str]: ...
