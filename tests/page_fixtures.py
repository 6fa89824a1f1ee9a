"""Shared fixtures for the test suites: page markup and a fixed clock."""

from datetime import datetime

from asana_improvements.application import ElementLocator, TransformSet
from asana_improvements.domain.dates import DateResolver
from asana_improvements.infrastructure.page import LxmlDocument
from asana_improvements.infrastructure.storage import MemoryStore, PersistedFlag
from asana_improvements.models import EnhancerConfig

# Monday 1 December 2025, mid-morning
MONDAY_MORNING = datetime(2025, 12, 1, 9, 30)

HIDDEN_KEY = "completedSubtasksHidden"


class FixedClock:
    """Callable clock that returns a settable instant."""

    def __init__(self, now: datetime = MONDAY_MORNING) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def task_pane_html(completed: int = 3, open_rows: int = 1, with_content: bool = True) -> str:
    rows = "".join(
        f'<div class="SubtaskTaskRow">Open {i}</div>' for i in range(open_rows)
    ) + "".join(
        f'<div class="SubtaskTaskRow SubtaskTaskRow--completed">Done {i}</div>'
        for i in range(completed)
    )
    content = (
        '<div class="LabeledRowStructure-right">'
        '<div class="LabeledRowStructure-content">Subtasks</div>'
        "</div>"
        if with_content
        else ""
    )
    return (
        '<div class="TaskPane">'
        f'<div class="TaskPaneSubtasks-label">{content}</div>'
        f'<div class="SubtaskGrid">{rows}</div>'
        "</div>"
    )


def page_html(
    due_dates: list[str] | None = None,
    panes: str | None = None,
    extra: str = "",
    topbar: bool = True,
) -> str:
    labels = "".join(f'<div class="DueDate">{text}</div>' for text in (due_dates or []))
    chrome = '<div class="GlobalTopbarStructure-rightSide"></div>' if topbar else ""
    return (
        "<html><head><title>Task</title></head><body>"
        f"{chrome}"
        f'<div class="Content">{panes if panes is not None else task_pane_html()}'
        f"{labels}{extra}</div>"
        "</body></html>"
    )


def make_document(**kwargs) -> LxmlDocument:
    return LxmlDocument.from_html(page_html(**kwargs))


def make_transforms(
    document: LxmlDocument,
    store: MemoryStore | None = None,
    config: EnhancerConfig | None = None,
    clock: FixedClock | None = None,
) -> TransformSet:
    config = config or EnhancerConfig()
    flag = PersistedFlag(store or MemoryStore(), config.storage.completed_tasks_hidden)
    resolver = DateResolver(config.date_parser, clock=clock or FixedClock())
    return TransformSet(config, document, ElementLocator(document), flag, resolver)


def due_texts(document: LxmlDocument) -> list[str]:
    return [label.text for label in document.query_all("div.DueDate")]
