"""timetracker - Command-line time tracking for projects and tasks."""

__version__ = "0.1.0"
