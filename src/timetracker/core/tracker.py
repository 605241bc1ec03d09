"""Project and task operations with user notifications."""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape

from timetracker.core.models import Project, Task
from timetracker.core.storage import StorageManager

logger = logging.getLogger(__name__)


class TimeTracker:
    """Creates projects and tasks and records tracked time."""

    def __init__(self, storage: StorageManager, console: Optional[Console] = None):
        """Initialize time tracker.

        Args:
            storage: Open storage manager
            console: Console for notifications. Creates default if None.
        """
        self.storage = storage
        self.console = console if console is not None else Console(emoji=False)

    def create_project(self, name: str) -> Project:
        """Persist a new project.

        Args:
            name: Project name

        Returns:
            Created project

        Raises:
            sqlite3.IntegrityError: If the project already exists
        """
        project = Project(name=name)
        self.storage.create_project(project)
        logger.info(f"Created project {name!r}")
        return project

    def create_project_and_notify(self, name: str) -> Project:
        """Announce and persist a new project."""
        self.console.print(
            f'Creating a new project "{escape(name)}"', highlight=False, emoji=False
        )
        return self.create_project(name)

    def create_task(self, project: Project, name: str) -> Task:
        """Persist a new task with no time spent.

        Args:
            project: Owning project
            name: Task name

        Returns:
            Created task

        Raises:
            sqlite3.IntegrityError: If the task exists or the project doesn't
        """
        task = Task(project=project, name=name, time=0)
        self.storage.create_project_task(task)
        logger.info(f"Created task {name!r} for project {project.name!r}")
        return task

    def create_task_and_notify(self, project: Project, name: str) -> Task:
        """Announce and persist a new task."""
        self.console.print(
            f'Creating a new task "{escape(name)}" for "{escape(project.name)}"',
            highlight=False,
            emoji=False,
        )
        return self.create_task(project, name)

    def update_task(self, task: Task, new_time: int) -> None:
        """Store a new cumulative total for a task."""
        self.storage.update_project_task(task, new_time)
