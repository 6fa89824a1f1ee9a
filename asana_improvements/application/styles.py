"""Static stylesheet built from configuration and injected once."""

import logging

from asana_improvements.domain.ports import PageDocument
from asana_improvements.models import EnhancerConfig

logger = logging.getLogger(__name__)

STYLE_SOURCE = "asana-workflow-enhancement"

PAYWALL_SELECTORS = [
    ".Sidebar-changeInviteIconEnabled",
    ".Sidebar-cleanAndClearInviteAndHelpSection",
    ".BusinessOrAdvancedUpgradeButton",
    ".GlobalTopbar-upgradeButton",
    ".PremiumIconItemA11y",
    ".TaskPaneGenerateSubtasksButton",
    ".AiAssistantGlobalTopbarPaneButtonPresentation",
]

COMPACT_CELL_SELECTORS = [
    ".SpreadsheetCell--isCompact.SpreadsheetCell",
    ".SpreadsheetCell--isCompact.SpreadsheetCell.SpreadsheetCustomPropertyEnumCell-spreadsheetCell",
    ".SpreadsheetCell--isCompact.SpreadsheetCell.SpreadsheetAssigneeCell-cell.SpreadsheetTaskRow-assigneeCell",
    ".SpreadsheetCell--isCompact.SpreadsheetCell.SpreadsheetCustomPropertyNumberCell-spreadsheetCell",
    ".SpreadsheetHeaderColumn--fixedWidth.SpreadsheetHeaderColumn--isClickable"
    ".SpreadsheetHeaderColumn.SpreadsheetProjectHeaderRow-headerColumn",
]


def build_css_rules(config: EnhancerConfig) -> str:
    """Render the enhancement stylesheet for ``config``."""
    ui = config.ui
    rules = [
        "/* Details pane width adjustments */",
        ".InboxPanesOrEmptyState-detailsPane:not(.InboxPanesOrEmptyState-pane--windowed) {",
        f"    width: {ui.details_pane_width} !important;",
        "}",
        "",
        "/* Task pane width adjustments */",
        ".FullWidthPageStructureWithDetailsOverlay-detailsOverlay--fullHeightTaskPane {",
        f"    width: {ui.task_pane_width} !important;",
        f"    min-width: {ui.task_pane_min_width} !important;",
        "}",
        "",
    ]

    if config.features.hide_paywall_elements:
        rules.append("/* Hide premium/upgrade UI elements */")
        rules.append(",\n".join(PAYWALL_SELECTORS) + " {")
        rules.append("    display: none !important;")
        rules.append("}")
        rules.append("")

    rules.extend([
        "/* Compact cell styling */",
        ".CustomPropertyEnumValueInput-button.CustomPropertyEnumValueInput-button--large {",
        f"    max-width: {ui.max_enum_value_width} !important;",
        f"    padding: {ui.enum_value_padding} !important;",
        "}",
        "",
        ",\n".join(COMPACT_CELL_SELECTORS) + " {",
        f"    width: {ui.compact_cell_width} !important;",
        "}",
    ])
    return "\n".join(rules) + "\n"


def inject_global_styles(document: PageDocument, css: str) -> bool:
    """Append ``css`` to the document head as a tagged style element.

    Returns:
        True on success, False if the CSS was empty or injection failed.
    """
    if not css or not isinstance(css, str):
        logger.error("Invalid CSS provided")
        return False

    try:
        head = document.ensure_head()
        style = document.create_element("style")
        style.set_attribute("type", "text/css")
        style.set_attribute("data-source", STYLE_SOURCE)
        style.text = css
        head.append(style)
        return True
    except Exception as e:
        logger.error(f"Failed to inject global styles: {e}")
        return False
