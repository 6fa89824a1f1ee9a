"""The page transforms.

Each transform re-derives everything it needs from the current page and the
persisted flag, so it can run any number of times against any state the host
leaves behind. Failures are contained: one bad element is logged and skipped,
and an unexpected error ends only the transform it happened in.

Pass order:
    1. annotate_due_dates
    2. auto_expand
    3. ensure_toggle_control
    4. apply_completed_visibility (then reconcile_indicators)
"""

import logging
from dataclasses import dataclass

from asana_improvements.application.locator import ElementLocator
from asana_improvements.domain.dates import DateResolver, annotate, is_annotated
from asana_improvements.domain.ports import PageDocument, PageElement
from asana_improvements.infrastructure.storage.persisted_flag import PersistedFlag
from asana_improvements.models import EnhancerConfig

logger = logging.getLogger(__name__)


@dataclass
class PassReport:
    """What a single reconciliation pass changed."""

    annotated: int = 0
    expanded: int = 0
    controls_created: int = 0
    rows_styled: int = 0

    @property
    def total(self) -> int:
        return self.annotated + self.expanded + self.controls_created + self.rows_styled


class TransformSet:
    """The enumerated, idempotent page transforms.

    Example:
        transforms = TransformSet(config, document, ElementLocator(document), flag, resolver)
        report = transforms.run_all()
    """

    def __init__(
        self,
        config: EnhancerConfig,
        document: PageDocument,
        locator: ElementLocator,
        flag: PersistedFlag,
        resolver: DateResolver,
    ) -> None:
        """Initialize the transform set.

        Args:
            config: Feature flags, selectors and control settings.
            document: Used only to create the injected controls.
            locator: The query surface for everything else.
            flag: The "completed rows hidden" preference.
            resolver: Due date resolver for the annotation transform.
        """
        self._config = config
        self._document = document
        self._locator = locator
        self._flag = flag
        self._resolver = resolver

    @property
    def config(self) -> EnhancerConfig:
        return self._config

    @property
    def flag(self) -> PersistedFlag:
        return self._flag

    def run_all(self) -> PassReport:
        """Run every enabled transform in pass order."""
        return PassReport(
            annotated=self.annotate_due_dates(),
            expanded=self.auto_expand(),
            controls_created=self.ensure_toggle_control(),
            rows_styled=self.apply_completed_visibility(),
        )

    # =========================================================================
    # Due dates
    # =========================================================================

    def annotate_due_dates(self) -> int:
        """Append "(N days)" to due date labels that lie in the future.

        Labels already containing an annotation are skipped, as are overdue
        and due-today labels.

        Returns:
            Number of labels annotated.
        """
        if not self._config.features.days_left_calculation:
            return 0

        try:
            labels = self._locator.all(self._config.selectors.due_date_element)
            annotated = 0
            for label in labels:
                try:
                    if self._annotate_label(label):
                        annotated += 1
                except Exception as e:
                    logger.warning(f"Error updating due date {label!r}: {e}")
            return annotated
        except Exception as e:
            logger.error(f"Critical error in annotate_due_dates: {e}", exc_info=True)
            return 0

    def _annotate_label(self, label: PageElement) -> bool:
        text = label.text.strip()
        if not text or is_annotated(text):
            return False

        due = self._resolver.resolve(text)
        if due is None:
            return False

        days = self._resolver.days_remaining(due)
        if days is None or days <= 0:
            return False

        label.text = annotate(text, days)
        return True

    # =========================================================================
    # Auto-expand
    # =========================================================================

    def auto_expand(self) -> int:
        """Click visible "load more" and "expand" affordances.

        Returns:
            Number of affordances clicked.
        """
        features = self._config.features
        selectors = []
        if features.auto_expand_subtasks:
            selectors.append(self._config.selectors.subtask_load_more)
        if features.auto_expand_comments:
            selectors.append(self._config.selectors.comment_expand)
        if not selectors:
            return 0

        try:
            buttons = self._locator.all(", ".join(selectors))
            clicked = 0
            for button in buttons:
                try:
                    if not self._is_rendered(button):
                        continue
                    button.click()
                    clicked += 1
                except Exception as e:
                    logger.warning(f"Error clicking expand button {button!r}: {e}")
            return clicked
        except Exception as e:
            logger.error(f"Critical error in auto_expand: {e}", exc_info=True)
            return 0

    @staticmethod
    def _is_rendered(element: PageElement) -> bool:
        try:
            width, height = element.bounding_box()
        except Exception as e:
            logger.warning(f"Error validating element {element!r}: {e}")
            return False
        return width > 0 and height > 0

    # =========================================================================
    # Completed rows
    # =========================================================================

    def apply_completed_visibility(self) -> int:
        """Show or hide every completed row according to the persisted flag.

        Indicators are reconciled afterwards, even when no rows remain, so a
        stale indicator disappears once its rows are gone.

        Returns:
            Number of rows styled.
        """
        if not self._config.features.toggle_completed_tasks:
            return 0

        try:
            hidden = self._flag.get()
            rows = self._locator.all(self._config.selectors.completed_subtask)
            styled = 0
            for row in rows:
                try:
                    row.set_style("display", "none" if hidden else None)
                    styled += 1
                except Exception as e:
                    logger.warning(f"Error applying visibility to {row!r}: {e}")

            self.reconcile_indicators()
            return styled
        except Exception as e:
            logger.error(f"Critical error in apply_completed_visibility: {e}", exc_info=True)
            return 0

    def reconcile_indicators(self) -> int:
        """Add or remove the toggle indicator on each subtask label.

        A label gets exactly one indicator while its task pane holds at
        least one completed row, and none otherwise.

        Returns:
            Number of indicators created or removed.
        """
        if not self._config.features.toggle_completed_tasks:
            return 0

        try:
            labels = self._locator.all(self._config.selectors.subtasks_label)
            changed = 0
            for label in labels:
                try:
                    changed += self._reconcile_indicator(label)
                except Exception as e:
                    logger.warning(f"Error updating task indicator {label!r}: {e}")
            return changed
        except Exception as e:
            logger.error(f"Critical error in reconcile_indicators: {e}", exc_info=True)
            return 0

    def _reconcile_indicator(self, label: PageElement) -> int:
        selectors = self._config.selectors
        controls = self._config.controls

        pane = self._locator.closest(label, selectors.task_pane)
        if pane is None:
            return 0

        completed = self._locator.all(selectors.completed_subtask, pane)
        indicator = self._locator.one(f".{controls.indicator_class}", label)

        if completed:
            if indicator is not None:
                return 0
            content = self._locator.one(selectors.label_content, label)
            if content is None:
                return 0
            content.append(self._build_indicator())
            return 1

        if indicator is not None:
            indicator.remove()
            return 1
        return 0

    def _build_indicator(self) -> PageElement:
        controls = self._config.controls
        indicator = self._document.create_element("span")
        indicator.add_class(controls.indicator_class)
        indicator.text = controls.indicator_text
        indicator.set_style("color", controls.indicator_color)
        indicator.set_style("cursor", "pointer")
        indicator.add_click_listener(self._on_toggle_clicked)
        return indicator

    def ensure_toggle_control(self) -> int:
        """Inject the topbar toggle button unless it already exists.

        Returns:
            1 if the button was created, 0 otherwise.
        """
        if not self._config.features.toggle_completed_tasks:
            return 0

        try:
            controls = self._config.controls
            if self._locator.one(f"#{controls.toggle_button_id}") is not None:
                return 0

            topbar = self._locator.one(self._config.selectors.topbar_right_side)
            if topbar is None:
                return 0

            button = self._document.create_element("button")
            button.set_attribute("id", controls.toggle_button_id)
            button.text = controls.toggle_button_text
            button.set_style("margin-left", "10px")
            button.set_style("cursor", "pointer")
            button.add_class(*controls.toggle_button_classes)
            button.add_click_listener(self._on_toggle_clicked)

            topbar.append(button)
            return 1
        except Exception as e:
            logger.error(f"Critical error in ensure_toggle_control: {e}", exc_info=True)
            return 0

    def toggle_completed(self) -> bool:
        """Flip the "completed hidden" preference and re-apply it immediately.

        Returns:
            The hidden state now in effect. If the write failed this is the
            unchanged stored state.
        """
        try:
            current = self._flag.get()
            saved = self._flag.set(not current)
            if not saved:
                logger.error("Failed to save completed tasks hidden state")

            self.apply_completed_visibility()
            return (not current) if saved else current
        except Exception as e:
            logger.error(f"Critical error in toggle_completed: {e}", exc_info=True)
            return False

    def _on_toggle_clicked(self) -> None:
        self.toggle_completed()
