"""Pydantic configuration models for Asana Improvements.

All configurable values are centralized here. Defaults reproduce the
behaviour of the Asana Improvements browser extension.
"""

from pydantic import BaseModel, Field


class UiConfig(BaseModel):
    """Pane widths and compact cell sizing used by the stylesheet."""

    details_pane_width: str = "80%"
    task_pane_width: str = "65%"
    task_pane_min_width: str = "50%"
    compact_cell_width: str = "80px"
    max_enum_value_width: str = "100px"
    enum_value_padding: str = "5px"


class FeatureFlags(BaseModel):
    """Switches deciding which transforms take part in a pass."""

    days_left_calculation: bool = True
    auto_expand_subtasks: bool = True
    auto_expand_comments: bool = True
    toggle_completed_tasks: bool = True
    hide_paywall_elements: bool = True


class DateParserConfig(BaseModel):
    """Vocabulary understood by the due date resolver.

    ``day_names`` must start with Monday so that a name's index matches
    ``datetime.weekday()``.
    """

    day_names: list[str] = Field(
        default_factory=lambda: [
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
            "Saturday",
            "Sunday",
        ],
        min_length=7,
        max_length=7,
    )
    today_keyword: str = "Today"
    tomorrow_keyword: str = "Tomorrow"
    date_formats: list[str] = Field(
        default_factory=lambda: [
            "%b %d, %Y",
            "%B %d, %Y",
            "%d %b, %Y",
            "%d %B, %Y",
            "%m/%d/%Y",
            "%Y-%m-%d",
        ]
    )


class SelectorConfig(BaseModel):
    """CSS selectors for the host application's markup."""

    due_date_element: str = "div.DueDate"
    subtask_load_more: str = ".SubtaskGrid-loadMore"
    comment_expand: str = ".TruncatedRichText-expand"
    completed_subtask: str = ".SubtaskTaskRow--completed"
    topbar_right_side: str = ".GlobalTopbarStructure-rightSide"
    subtasks_label: str = ".TaskPaneSubtasks-label"
    task_pane: str = ".TaskPane"
    label_content: str = ".LabeledRowStructure-right .LabeledRowStructure-content"


class ControlConfig(BaseModel):
    """Identity and look of the injected toggle controls."""

    toggle_button_id: str = "toggleCompletedSubtasksButton"
    toggle_button_text: str = "Toggle Complete tasks"
    toggle_button_classes: list[str] = Field(
        default_factory=lambda: [
            "ThemeableRectangularButtonPresentation",
            "ThemeableRectangularButtonPresentation--medium",
            "TopbarContingentUpgradeButton-button",
            "UpsellButton",
        ]
    )
    indicator_class: str = "completed-subtasks-indicator"
    indicator_text: str = " [Toggle Complete tasks]"
    indicator_color: str = "#eb7586"


class StorageConfig(BaseModel):
    """Keys used in the durable key/value store."""

    completed_tasks_hidden: str = "completedSubtasksHidden"


class PerformanceConfig(BaseModel):
    """Timing knobs for the reconciliation loop."""

    mutation_observer_debounce: int = Field(default=100, ge=0, description="Debounce window in ms")


class EnhancerConfig(BaseModel):
    """Complete configuration for the page enhancer."""

    ui: UiConfig = Field(default_factory=UiConfig)
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    date_parser: DateParserConfig = Field(default_factory=DateParserConfig)
    selectors: SelectorConfig = Field(default_factory=SelectorConfig)
    controls: ControlConfig = Field(default_factory=ControlConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
