"""Concurrent task-reminder engine with a console front-end."""

__version__ = "0.1.0"
