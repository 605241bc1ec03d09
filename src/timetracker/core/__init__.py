"""Core functionality for time tracking."""

from timetracker.core.models import Project, Task
from timetracker.core.session import TrackingSession
from timetracker.core.storage import StorageManager
from timetracker.core.tracker import TimeTracker

__all__ = ["Project", "Task", "StorageManager", "TimeTracker", "TrackingSession"]
