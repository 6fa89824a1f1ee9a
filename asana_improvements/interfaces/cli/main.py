"""Entry point for the Asana Improvements CLI.

Usage:
    python -m asana_improvements.interfaces.cli.main

Or via installed entry point:
    asana-improvements <command>
"""

from asana_improvements.interfaces.cli import app


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
