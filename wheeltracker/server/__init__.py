"""FastAPI backend server for the wheel tracker."""

from wheeltracker import __version__

__all__ = ["__version__"]
