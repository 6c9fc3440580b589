"""Gameplan tracker: daily/weekly resetting task lists with completion streaks."""

__version__ = "0.1.0"
