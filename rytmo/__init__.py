"""Rytmo — focus timer for the menu bar."""

__version__ = "0.1.0"
