"""Core data models for time tracking."""

import sqlite3
from dataclasses import dataclass
from typing import Any


@dataclass
class Project:
    """Named grouping of tasks.

    Attributes:
        name: Project name, unique across all projects
    """

    name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name}

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Project":
        """Create Project from a database row."""
        return cls(name=row["name"])


@dataclass
class Task:
    """Unit of tracked work belonging to exactly one project.

    Attributes:
        project: Owning project
        name: Task name, unique within its project
        time: Cumulative minutes spent on the task
    """

    project: Project
    name: str
    time: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "project": self.project.name,
            "name": self.name,
            "time": self.time,
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Task":
        """Create Task from a database row."""
        return cls(
            project=Project(name=row["project"]),
            name=row["name"],
            time=int(row["time"]),
        )
