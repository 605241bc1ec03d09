"""Main CLI application and interactive session."""

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timetracker import __version__
from timetracker.cli.config_commands import config, console, error_console, get_config
from timetracker.core.config import ConfigManager
from timetracker.core.models import Project, Task
from timetracker.core.session import TrackingSession
from timetracker.core.storage import StorageManager
from timetracker.core.tracker import TimeTracker
from timetracker.core.validation import is_valid_choice, is_valid_name

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_HANDLER_NAME = "timetracker"


def setup_logging(config_mgr: ConfigManager) -> None:
    """Configure the root logger from the advanced.* settings.

    Records go to advanced.log_file when set, otherwise to stderr.
    """
    log_level = getattr(logging, config_mgr.get("advanced.log_level", "WARNING"))
    log_file = config_mgr.get("advanced.log_file")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace the handler from an earlier invocation in the same process
    for existing in list(root_logger.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            root_logger.removeHandler(existing)
            existing.close()

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(Path(log_file).expanduser())
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.set_name(LOG_HANDLER_NAME)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def resolve_database_path(db_path: Optional[str], config_mgr: ConfigManager) -> Optional[Path]:
    """Pick the database file: --db-path, then general.database_path, then the default."""
    if db_path:
        return Path(db_path).expanduser()
    configured = config_mgr.get("general.database_path")
    if configured:
        return Path(configured).expanduser()
    return None


def read_line(prompt: str, output: Optional[Console] = None) -> str:
    """Prompt for one line of input. End of input reads as an empty line."""
    try:
        return (output or console).input(prompt)
    except EOFError:
        return ""


def print_plain(output: Console, text: str) -> None:
    """Print user-supplied text without markup or highlighting."""
    output.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def enter_new_task(
    tracker: TimeTracker,
    project: Project,
    start_session: Callable[[Task], Any],
    prompt: Callable[[str], str],
) -> None:
    """Ask for a new task name, then create and track the task."""
    task_name = is_valid_name(prompt("Enter a new task: "))
    if task_name is None:
        print_plain(tracker.console, "No valid task name provided, exit.")
        return

    task = tracker.create_task_and_notify(project, task_name)
    start_session(task)


def choose_task(
    storage: StorageManager,
    tracker: TimeTracker,
    project: Project,
    start_session: Callable[[Task], Any],
    prompt: Callable[[str], str],
) -> None:
    """List the tasks of an existing project and track the chosen or a new one."""
    output = tracker.console
    tasks = storage.get_project_tasks(project)

    if not tasks:
        print_plain(output, "This project has no tasks yet.")
        enter_new_task(tracker, project, start_session, prompt)
        return

    print_plain(output, f'These tasks are assigned to "{project.name}"')
    for i, task in enumerate(tasks, 1):
        print_plain(output, f"[{i}] {task.name} / Spent: {task.time}")

    task_choice = prompt(
        "Enter task number to continue tracking or a new name to start a new task: "
    )

    chosen = is_valid_choice(tasks, task_choice)
    if chosen is not None:
        start_session(chosen)
        return

    task_name = is_valid_name(task_choice)
    if task_name is None:
        print_plain(output, "No valid task name provided, exit.")
        return

    start_session(tracker.create_task_and_notify(project, task_name))


def run_interactive(
    storage: StorageManager,
    tracker: TimeTracker,
    start_session: Callable[[Task], Any],
    prompt: Callable[[str], str] = read_line,
) -> None:
    """Select or create a project and a task, then track time on it.

    Invalid input ends the session with a message; nothing is re-prompted.

    Args:
        storage: Open storage manager
        tracker: Time tracker for creating projects and tasks
        start_session: Runs a tracking session for the resolved task
        prompt: Shows a prompt and returns the line entered
    """
    output = tracker.console
    storage.create_tables()
    projects = storage.get_projects()

    if not projects:
        print_plain(output, "No projects yet.")
        project_choice = prompt("Start a new project by giving it a name: ")
    else:
        for i, project in enumerate(projects, 1):
            print_plain(output, f"[{i}] {project.name}")
        project_choice = prompt("Enter project number or the name of a new project: ")

    chosen = is_valid_choice(projects, project_choice)
    if chosen is not None:
        logger.debug(f"Selected project {chosen.name!r}")
        choose_task(storage, tracker, chosen, start_session, prompt)
        return

    project_name = is_valid_name(project_choice)
    if project_name is None:
        print_plain(output, "No valid project name provided, exit.")
        return

    project = tracker.create_project_and_notify(project_name)
    enter_new_task(tracker, project, start_session, prompt)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option("--db-path", help="Custom database file", type=click.Path(dir_okay=False))
@click.option("--config", "config_path", help="Custom config file", type=click.Path(dir_okay=False))
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(
    ctx: click.Context, db_path: Optional[str], config_path: Optional[str], no_color: bool
) -> None:
    """timetracker - Track minutes spent on project tasks.

    Run without a command to pick a project and task and start tracking.
    """
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db_path
    ctx.obj["config_path"] = config_path

    if no_color:
        console.no_color = error_console.no_color = True

    if ctx.invoked_subcommand is None:
        ctx.invoke(track)


@cli.command()
@click.pass_context
def track(ctx: click.Context) -> None:
    """Choose a project and task interactively and track time on it.

    Example:
        timetracker track
    """
    config_mgr = get_config(ctx)
    setup_logging(config_mgr)
    if not config_mgr.get("display.color", True):
        console.no_color = error_console.no_color = True

    interval = config_mgr.get("tracking.interval")
    rounding = config_mgr.get("tracking.rounding")
    database_path = resolve_database_path(ctx.obj.get("db_path"), config_mgr)

    with StorageManager(database_path) as storage:
        tracker = TimeTracker(storage, console)

        def start_session(task: Task) -> int:
            session = TrackingSession(
                tracker, task, console=console, interval=interval, rounding=rounding
            )
            return session.run()

        run_interactive(storage, tracker, start_session)


@cli.command("ls")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_tasks(ctx: click.Context, as_json: bool) -> None:
    """List projects and tasks with their stored minutes.

    Example:
        timetracker ls
        timetracker ls --json
    """
    config_mgr = get_config(ctx)
    setup_logging(config_mgr)
    database_path = resolve_database_path(ctx.obj.get("db_path"), config_mgr)

    with StorageManager(database_path) as storage:
        storage.create_tables()
        projects = storage.get_projects()

        if not projects:
            console.print("[yellow]No projects yet[/yellow]")
            return

        tasks = {project.name: storage.get_project_tasks(project) for project in projects}

    if as_json:
        data = [
            {**project.to_dict(), "tasks": [task.to_dict() for task in tasks[project.name]]}
            for project in projects
        ]
        print(json.dumps(data, indent=2))
        return

    table = Table(title="Projects")
    table.add_column("Project", style="blue")
    table.add_column("Task", style="bold")
    table.add_column("Spent (minutes)", style="magenta", justify="right")

    for project in projects:
        if not tasks[project.name]:
            table.add_row(escape(project.name), "-", "-")
        for task in tasks[project.name]:
            table.add_row(escape(project.name), escape(task.name), str(task.time))

    console.print(table)


cli.add_command(config)


if __name__ == "__main__":
    cli(obj={})
