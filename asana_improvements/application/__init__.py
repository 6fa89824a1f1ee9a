"""Application layer: the reconciliation engine.

Modules:
    locator - Exception-isolated element lookup
    transforms - The idempotent page transforms
    debounce - asyncio trailing-edge debouncer
    reconciler - Debounced reconciliation loop
    styles - Static stylesheet build and injection
    enhancer - Bootstrap facade and debug surface

Example usage:
    >>> from asana_improvements.application import Enhancer
    >>> from asana_improvements.infrastructure import LxmlDocument, MemoryStore
    >>>
    >>> document = LxmlDocument.from_html(html)
    >>> report = Enhancer(document, MemoryStore()).apply_once()
"""

from asana_improvements.application.debounce import Debouncer
from asana_improvements.application.enhancer import DebugApi, Enhancer
from asana_improvements.application.locator import ElementLocator
from asana_improvements.application.reconciler import ReconciliationLoop
from asana_improvements.application.styles import build_css_rules, inject_global_styles
from asana_improvements.application.transforms import PassReport, TransformSet

__all__ = [
    "Debouncer",
    "DebugApi",
    "Enhancer",
    "ElementLocator",
    "ReconciliationLoop",
    "build_css_rules",
    "inject_global_styles",
    "PassReport",
    "TransformSet",
]
