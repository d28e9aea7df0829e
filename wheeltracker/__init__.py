"""Wheel Tracker - options wheel strategy trade and performance tracking."""

__version__ = "1.0.0"
