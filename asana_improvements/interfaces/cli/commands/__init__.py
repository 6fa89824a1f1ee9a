"""CLI command groups.

Command groups:
- page: apply enhancements to a saved page, toggle the hidden preference
- dates: resolve due date labels
- config: show or initialize the configuration
"""

from asana_improvements.interfaces.cli.commands import config, dates, page

__all__ = ["config", "dates", "page"]
