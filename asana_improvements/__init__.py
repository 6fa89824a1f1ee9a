"""Asana Improvements - workflow enhancements for Asana task pages."""

__version__ = "1.0.0"
