"""User-facing interfaces for Asana Improvements.

Currently a Typer CLI (asana_improvements.interfaces.cli).
"""
