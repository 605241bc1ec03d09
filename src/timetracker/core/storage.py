"""SQLite storage manager for projects and tasks."""

import logging
import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Optional

from timetracker.core.models import Project, Task

logger = logging.getLogger(__name__)

DATABASE_FILENAME = "timetracker.sqlite"

CREATE_PROJECT_TABLE = "CREATE TABLE IF NOT EXISTS project (name TEXT PRIMARY KEY)"

CREATE_TASK_TABLE = (
    "CREATE TABLE IF NOT EXISTS task ("
    "project TEXT, "
    "name TEXT, "
    "time INT NOT NULL DEFAULT 0, "
    "PRIMARY KEY (project, name), "
    "FOREIGN KEY (project) REFERENCES project(name))"
)


def default_database_path() -> Path:
    """Return the per-user database location (~/timetracker.sqlite)."""
    return Path.home() / DATABASE_FILENAME


class StorageManager:
    """Manages the SQLite database holding projects and tasks.

    A single connection is opened on construction and shared by every
    operation until ``close()`` is called. Use as a context manager to
    release it on exit.
    """

    def __init__(self, database_path: Optional[Path] = None):
        """Initialize storage manager.

        Args:
            database_path: Custom database file. Defaults to ~/timetracker.sqlite
        """
        if database_path is None:
            database_path = default_database_path()

        self.database_path = database_path
        self.connection = sqlite3.connect(str(self.database_path))
        self.connection.row_factory = sqlite3.Row
        # SQLite leaves foreign keys unenforced unless asked per connection
        self.connection.execute("PRAGMA foreign_keys = ON")
        logger.debug(f"Opened database {self.database_path}")

    def __enter__(self) -> "StorageManager":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        self.connection.close()
        logger.debug(f"Closed database {self.database_path}")

    def create_tables(self) -> None:
        """Create the project and task tables if they don't exist.

        Both statements run in one transaction, which is committed on
        success and rolled back if either fails.
        """
        cursor = self.connection.cursor()
        cursor.execute("BEGIN")
        try:
            cursor.execute(CREATE_PROJECT_TABLE)
            cursor.execute(CREATE_TASK_TABLE)
        except sqlite3.Error:
            self.connection.rollback()
            raise
        self.connection.commit()

    # Project operations

    def get_projects(self) -> tuple[Project, ...]:
        """Load all projects in storage order.

        Returns:
            Tuple of Project objects
        """
        rows = self.connection.execute("SELECT name FROM project").fetchall()
        return tuple(Project.from_row(row) for row in rows)

    def create_project(self, project: Project) -> None:
        """Insert a new project.

        Args:
            project: Project to insert

        Raises:
            sqlite3.IntegrityError: If a project with the same name exists
        """
        with self.connection:
            self.connection.execute(
                "INSERT INTO project (name) VALUES (:name)", {"name": project.name}
            )
        logger.debug(f"Inserted project {project.name!r}")

    # Task operations

    def get_project_tasks(self, project: Project) -> tuple[Task, ...]:
        """Load all tasks assigned to a project.

        Args:
            project: Owning project

        Returns:
            Tuple of Task objects
        """
        rows = self.connection.execute(
            "SELECT name, project, time FROM task WHERE project = :project",
            {"project": project.name},
        ).fetchall()
        return tuple(Task.from_row(row) for row in rows)

    def create_project_task(self, task: Task) -> None:
        """Insert a new task. Its time starts at the column default of 0.

        Args:
            task: Task to insert

        Raises:
            sqlite3.IntegrityError: If the task already exists or its project doesn't
        """
        with self.connection:
            self.connection.execute(
                "INSERT INTO task (name, project) VALUES (:name, :project)",
                {"name": task.name, "project": task.project.name},
            )
        logger.debug(f"Inserted task {task.project.name!r}/{task.name!r}")

    def update_project_task(self, task: Task, new_time: int) -> None:
        """Overwrite the stored minutes of a task.

        Args:
            task: Task to update, matched by project and name
            new_time: New cumulative minutes
        """
        with self.connection:
            self.connection.execute(
                "UPDATE task SET time = :new_time WHERE project = :project AND name = :name",
                {"new_time": new_time, "project": task.project.name, "name": task.name},
            )
        logger.debug(f"Set time of {task.project.name!r}/{task.name!r} to {new_time}")
