"""Interactive tracking session with a periodic status line."""

import logging
import sys
import threading
from collections.abc import Callable
from datetime import datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType

from timetracker.core.models import Task
from timetracker.core.tracker import TimeTracker

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60.0

# Ties go to the even minute, matching the built-in round()
DEFAULT_ROUNDING = "half_even"

ROUNDING_MODES = {
    "half_even": ROUND_HALF_EVEN,
    "half_up": ROUND_HALF_UP,
}


class SessionState(Enum):
    """Lifecycle of a tracking session."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def elapsed_minutes(start: datetime, end: datetime, rounding: str = DEFAULT_ROUNDING) -> int:
    """Whole minutes between two points in time, rounded to nearest.

    Args:
        start: Beginning of the span
        end: End of the span
        rounding: Tie-breaking mode, one of ROUNDING_MODES

    Returns:
        Rounded minutes, never negative

    Example:
        >>> elapsed_minutes(datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 9, 2, 30))
        2
        >>> elapsed_minutes(datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 9, 2, 30), "half_up")
        3
    """
    seconds = Decimal(str((end - start).total_seconds()))
    if seconds <= 0:
        return 0
    minutes = (seconds / 60).quantize(Decimal(1), rounding=ROUNDING_MODES[rounding])
    return int(minutes)


def read_stop_signal() -> str:
    """Block until a line is entered. End of input also stops the session."""
    try:
        return input()
    except EOFError:
        return ""


class TrackingSession:
    """Tracks time spent on one task until the user presses Enter.

    While running, a background ticker refreshes the status line every
    ``interval`` seconds. The ticker only sees the immutable start time and a
    stop event; the final total is computed and stored by the foreground.
    """

    def __init__(
        self,
        tracker: TimeTracker,
        task: Task,
        console: Optional[Console] = None,
        interval: float = DEFAULT_INTERVAL,
        rounding: str = DEFAULT_ROUNDING,
        clock: Callable[[], datetime] = datetime.now,
        read_line: Callable[[], str] = read_stop_signal,
    ):
        """Initialize tracking session.

        Args:
            tracker: Time tracker used to store the result
            task: Task to track
            console: Console for status output. Creates default if None.
            interval: Seconds between status refreshes
            rounding: Rounding mode for elapsed minutes
            clock: Source of the current time
            read_line: Blocks until the user asks to stop

        Raises:
            ValueError: If interval is not positive or rounding is unknown
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        if rounding not in ROUNDING_MODES:
            raise ValueError(
                f"Unknown rounding mode: {rounding}. "
                f"Use one of: {', '.join(ROUNDING_MODES)}"
            )

        self.tracker = tracker
        self.task = task
        self.console = console if console is not None else tracker.console
        self.interval = interval
        self.rounding = rounding
        self.clock = clock
        self.read_line = read_line
        self.state = SessionState.IDLE

    def run(self) -> int:
        """Track until stopped, then store the new total.

        Returns:
            New cumulative minutes stored for the task

        Raises:
            RuntimeError: If the session was already started
        """
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"Tracking session is {self.state.value}")

        start = self.clock()
        self.state = SessionState.RUNNING
        logger.info(f"Started tracking {self.task.project.name!r}/{self.task.name!r}")

        self.console.print()
        self.console.print("Press Enter to stop.")
        self._show_status(0, self.task.time)

        stop_event = threading.Event()
        ticker = threading.Thread(
            target=self._tick,
            args=(start, stop_event),
            name="timetracker-ticker",
            daemon=True,
        )
        ticker.start()

        try:
            self.read_line()
        finally:
            stop_event.set()
            ticker.join()

        diff = elapsed_minutes(start, self.clock(), self.rounding)
        total = diff + self.task.time
        self.state = SessionState.STOPPED

        if self.console.is_terminal and not sys.stdin.isatty():
            # Status line is still open when Enter was not echoed
            self.console.print()
        self.console.print(
            f"Storing progress of {diff} minutes for a total of {total} minutes "
            f"on {self.task.project.name}/{self.task.name}...",
            markup=False,
            soft_wrap=True,
            highlight=False,
            emoji=False,
        )
        self.tracker.update_task(self.task, total)
        logger.info(f"Stopped tracking after {diff} minutes ({total} minutes total)")
        return total

    def _tick(self, start: datetime, stop_event: threading.Event) -> None:
        """Refresh the status line until the stop event is set."""
        while not stop_event.wait(self.interval):
            diff = elapsed_minutes(start, self.clock(), self.rounding)
            self._show_status(diff, diff + self.task.time)

    def _show_status(self, diff: int, total: int) -> None:
        """Print the status line, in place when writing to a terminal."""
        text = (
            f"Working on {self.task.project.name}/{self.task.name} "
            f"for {diff} minutes ({total} minutes total)"
        )
        if self.console.is_terminal:
            self.console.control(
                Control.move_to_column(0), Control((ControlType.ERASE_IN_LINE, 2))
            )
            self.console.print(
                text, end="", markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        else:
            self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
