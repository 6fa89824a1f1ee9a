"""Page infrastructure.

lxml implementation of the PageDocument / PageElement protocols.
"""

from asana_improvements.infrastructure.page.lxml_document import (
    LxmlDocument,
    LxmlElement,
    compile_selector,
)

__all__ = [
    "LxmlDocument",
    "LxmlElement",
    "compile_selector",
]
