"""Pytest configuration and shared fixtures."""

import io
import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]

from timetracker.core.storage import StorageManager


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")


@pytest.fixture  # type: ignore[misc]
def temp_dir() -> Path:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture  # type: ignore[misc]
def temp_storage(temp_dir: Path) -> StorageManager:
    """Create a storage manager on a temporary database with tables created."""
    with StorageManager(temp_dir / "timetracker.sqlite") as storage:
        storage.create_tables()
        yield storage


@pytest.fixture  # type: ignore[misc]
def output() -> Console:
    """Console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=200)

