"""lxml-backed page document.

Wraps an lxml HTML tree behind the PageDocument / PageElement protocols so
the enhancer can run against saved page snapshots or against a tree a host
drives programmatically. Structural changes made through this API (child
insertion, removal, text replacement) inside ``<body>`` are reported to
observers the way a MutationObserver with ``childList`` and ``subtree``
reports them. Attribute and style changes are not reported.
"""

import logging
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

import lxml.html
from cssselect import SelectorError
from lxml import etree
from lxml.cssselect import CSSSelector

from asana_improvements.domain.ports import (
    ChangeCallback,
    ChangeKind,
    ChangeRecord,
    InvalidSelectorError,
)

logger = logging.getLogger(__name__)

# Snapshots carry no layout, so a displayed element without explicit inline
# dimensions reports this nominal size.
NOMINAL_SIZE = 1.0


@lru_cache(maxsize=256)
def _compile_cached(selector: str) -> CSSSelector:
    try:
        return CSSSelector(selector, translator="html")
    except SelectorError as e:
        raise InvalidSelectorError(f"Invalid selector {selector!r}: {e}") from e


def compile_selector(selector: object) -> CSSSelector:
    """Compile a CSS selector, raising InvalidSelectorError for bad input."""
    if not isinstance(selector, str) or not selector.strip():
        raise InvalidSelectorError(f"Invalid selector provided: {selector!r}")
    return _compile_cached(selector.strip())


def parse_style(raw: str | None) -> dict[str, str]:
    """Parse an inline style attribute into an ordered property map."""
    styles: dict[str, str] = {}
    for declaration in (raw or "").split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            styles[name.strip().lower()] = value.strip()
    return styles


def format_style(styles: dict[str, str]) -> str:
    """Inverse of parse_style."""
    return "; ".join(f"{name}: {value}" for name, value in styles.items())


def _parse_px(value: str | None) -> float | None:
    if value is None:
        return None
    number = value.strip().lower().removesuffix("px").strip()
    try:
        return float(number)
    except ValueError:
        return None


class LxmlElement:
    """PageElement implementation over a single lxml element.

    Wrappers are cheap and created per query; two wrappers are equal when
    they wrap the same underlying node.
    """

    def __init__(self, document: "LxmlDocument", node: etree._Element) -> None:
        self._document = document
        self._node = node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LxmlElement):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        classes = self._node.get("class", "")
        return f"<LxmlElement {self._node.tag} class={classes!r}>"

    @property
    def node(self) -> etree._Element:
        """The wrapped lxml node."""
        return self._node

    @property
    def tag(self) -> str:
        return str(self._node.tag)

    @property
    def element_id(self) -> str | None:
        return self._node.get("id")

    @property
    def text(self) -> str:
        return str(self._node.text_content())

    @text.setter
    def text(self, value: str) -> None:
        for child in list(self._node):
            self._node.remove(child)
        self._node.text = value
        self._document._notify("text", self._node)

    @property
    def is_connected(self) -> bool:
        """True while the element is part of the document tree."""
        return self._node.getroottree().getroot() is self._document.root

    def get_attribute(self, name: str) -> str | None:
        return self._node.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self._node.set(name, value)

    def has_class(self, name: str) -> bool:
        return name in self._node.get("class", "").split()

    def add_class(self, *names: str) -> None:
        classes = self._node.get("class", "").split()
        for name in names:
            if name not in classes:
                classes.append(name)
        self._node.set("class", " ".join(classes))

    def get_style(self, name: str) -> str | None:
        return parse_style(self._node.get("style")).get(name.lower())

    def set_style(self, name: str, value: str | None) -> None:
        """Set one inline style property; an empty value removes it."""
        styles = parse_style(self._node.get("style"))
        if value:
            styles[name.lower()] = value
        else:
            styles.pop(name.lower(), None)

        if styles:
            self._node.set("style", format_style(styles))
        elif "style" in self._node.attrib:
            del self._node.attrib["style"]

    def bounding_box(self) -> tuple[float, float]:
        if not self.is_connected:
            return (0.0, 0.0)

        for node in (self._node, *self._node.iterancestors()):
            if node.get("hidden") is not None:
                return (0.0, 0.0)
            if parse_style(node.get("style")).get("display") == "none":
                return (0.0, 0.0)

        styles = parse_style(self._node.get("style"))
        width = _parse_px(styles.get("width"))
        height = _parse_px(styles.get("height"))
        return (
            NOMINAL_SIZE if width is None else width,
            NOMINAL_SIZE if height is None else height,
        )

    def click(self) -> None:
        """Dispatch a click, bubbling from this element up to the root."""
        self._document._dispatch_click(self._node)

    def add_click_listener(self, listener: Callable[[], None]) -> None:
        self._document._add_listener(self._node, listener)

    def append(self, child: "LxmlElement") -> None:
        self._node.append(child.node)
        self._document._notify("added", self._node)

    def remove(self) -> None:
        """Detach from the tree, dropping click listeners on the removed subtree."""
        parent = self._node.getparent()
        if parent is None:
            return
        self._document._forget_listeners(self._node)
        # drop_tree keeps the tail text attached to the previous sibling
        self._node.drop_tree()
        self._document._notify("removed", parent)

    def query_one(self, selector: str) -> "LxmlElement | None":
        matches = self.query_all(selector)
        return matches[0] if matches else None

    def query_all(self, selector: str) -> list["LxmlElement"]:
        """Descendants matching ``selector``, like Element.querySelectorAll.

        The selector is matched against the whole tree, so in "A B" the A
        part may lie outside this element.
        """
        compiled = compile_selector(selector)
        inside = set(self._node.iterdescendants())
        top = self._node.getroottree().getroot()
        return [LxmlElement(self._document, node) for node in compiled(top) if node in inside]

    def closest(self, selector: str) -> "LxmlElement | None":
        compiled = compile_selector(selector)
        top = self._node.getroottree().getroot()
        matches = set(compiled(top))
        for node in (self._node, *self._node.iterancestors()):
            if node in matches:
                return LxmlElement(self._document, node)
        return None


class _Observation:
    """Subscription handle for LxmlDocument.observe."""

    def __init__(self, document: "LxmlDocument", callback: ChangeCallback) -> None:
        self._document = document
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def disconnect(self) -> None:
        if not self._active:
            return
        self._active = False
        self._document._observations.remove(self)


class LxmlDocument:
    """PageDocument implementation over an lxml HTML tree.

    Example:
        document = LxmlDocument.from_html(Path("task.html").read_text())
        for label in document.query_all("div.DueDate"):
            print(label.text)
    """

    def __init__(self, root: etree._Element) -> None:
        self._root = root
        self._observations: list[_Observation] = []
        self._listeners: dict[etree._Element, list[Callable[[], None]]] = {}

    @classmethod
    def from_html(cls, markup: str) -> "LxmlDocument":
        """Parse a full HTML document."""
        return cls(lxml.html.document_fromstring(markup))

    @classmethod
    def from_path(cls, path: Path) -> "LxmlDocument":
        """Parse an HTML file saved from the browser."""
        return cls.from_html(path.read_text(encoding="utf-8"))

    @property
    def root(self) -> etree._Element:
        return self._root

    def query_one(self, selector: str) -> LxmlElement | None:
        matches = self.query_all(selector)
        return matches[0] if matches else None

    def query_all(self, selector: str) -> list[LxmlElement]:
        compiled = compile_selector(selector)
        return [LxmlElement(self, node) for node in compiled(self._root)]

    def create_element(self, tag: str) -> LxmlElement:
        return LxmlElement(self, lxml.html.Element(tag))

    def ensure_head(self) -> LxmlElement:
        head = self._root.find("head")
        if head is None:
            head = lxml.html.Element("head")
            self._root.insert(0, head)
        return LxmlElement(self, head)

    def append_html(self, parent: LxmlElement, markup: str) -> list[LxmlElement]:
        """Parse an HTML fragment and append it under ``parent``.

        This is how a host (or a test standing in for one) renders new
        content; it reports a single structural change.
        """
        added: list[LxmlElement] = []
        node = parent.node
        for fragment in lxml.html.fragments_fromstring(markup):
            if isinstance(fragment, str):
                last = node[-1] if len(node) else None
                if last is None:
                    node.text = (node.text or "") + fragment
                else:
                    last.tail = (last.tail or "") + fragment
                continue
            node.append(fragment)
            added.append(LxmlElement(self, fragment))
        self._notify("added", node)
        return added

    def observe(self, callback: ChangeCallback) -> _Observation:
        observation = _Observation(self, callback)
        self._observations.append(observation)
        return observation

    def serialize(self) -> str:
        """Render the current tree back to HTML."""
        return lxml.html.tostring(self._root.getroottree(), encoding="unicode")

    def _in_body(self, node: etree._Element) -> bool:
        body = self._root.find("body")
        if body is None:
            return False
        return node is body or any(ancestor is body for ancestor in node.iterancestors())

    def _notify(self, kind: ChangeKind, node: etree._Element) -> None:
        if not self._observations or not self._in_body(node):
            return
        records = [ChangeRecord(kind=kind, target=LxmlElement(self, node))]
        for observation in list(self._observations):
            if observation.active:
                observation.callback(records)

    def _add_listener(self, node: etree._Element, listener: Callable[[], None]) -> None:
        self._listeners.setdefault(node, []).append(listener)

    def _forget_listeners(self, node: etree._Element) -> None:
        for descendant in node.iter():
            self._listeners.pop(descendant, None)

    def _dispatch_click(self, node: etree._Element) -> None:
        for target in (node, *node.iterancestors()):
            for listener in list(self._listeners.get(target, [])):
                listener()
