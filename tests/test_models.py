"""Tests for core data models."""

import sqlite3

from timetracker.core.models import Project, Task


def make_row(sql: str) -> sqlite3.Row:
    """Build a sqlite3.Row from a literal SELECT."""
    connection = sqlite3.connect(":memory:")
    connection.row_factory = sqlite3.Row
    row = connection.execute(sql).fetchone()
    connection.close()
    return row


class TestProject:
    """Test Project model."""

    def test_project_creation(self) -> None:
        """Test basic project creation."""
        project = Project(name="Alpha")

        assert project.name == "Alpha"

    def test_projects_compare_by_name(self) -> None:
        """Test that projects with the same name are equal."""
        assert Project("Alpha") == Project("Alpha")
        assert Project("Alpha") != Project("Beta")

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        assert Project("Alpha").to_dict() == {"name": "Alpha"}

    def test_from_row(self) -> None:
        """Test creation from a database row."""
        row = make_row("SELECT 'Alpha' AS name")

        assert Project.from_row(row) == Project("Alpha")


class TestTask:
    """Test Task model."""

    def test_task_defaults_to_zero_minutes(self) -> None:
        """Test that a new task has no time spent."""
        task = Task(project=Project("Alpha"), name="Work")

        assert task.time == 0
        assert task.project.name == "Alpha"

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        task = Task(project=Project("Alpha"), name="Work", time=42)

        assert task.to_dict() == {"project": "Alpha", "name": "Work", "time": 42}

    def test_from_row(self) -> None:
        """Test creation from a database row."""
        row = make_row("SELECT 'Work' AS name, 'Alpha' AS project, 42 AS time")

        task = Task.from_row(row)

        assert task == Task(project=Project("Alpha"), name="Work", time=42)
