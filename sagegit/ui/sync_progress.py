"""Step-by-step progress display for a sync."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sagegit.ui.spinner import Spinner
from sagegit.ui.style import bold, gray, green, red, yellow

_SLOW_SYNC = timedelta(seconds=5)

_DEFAULT_STEPS = (
    ("verify", "Repository verification"),
    ("stash", "Work in progress"),
    ("fetch", "Fetching updates"),
    ("integrate", "Integrating changes"),
    ("push", "Pushing changes"),
    ("restore", "Restoring work"),
)


class StepStatus(enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAIL = "fail"
    SKIP = "skip"


@dataclass
class SyncStep:
    name: str
    description: str
    status: StepStatus = StepStatus.PENDING
    start_time: datetime | None = None
    end_time: datetime | None = None


def _format_duration(delta: timedelta) -> str:
    """Format a duration rounded to milliseconds, as ``250ms``, ``1.5s`` or ``1m2s``."""
    ms = int(abs(delta.total_seconds()) * 1000 + 0.5)
    sign = "-" if delta.total_seconds() < 0 and ms else ""
    if ms == 0:
        return "0s"
    if ms < 1000:
        return f"{sign}{ms}ms"
    hours, rem = divmod(ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, frac = divmod(rem, 1000)
    seconds = str(secs) + (("." + f"{frac:03d}".rstrip("0")) if frac else "")
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


class SyncProgress:
    """Tracks the steps of a sync and reports on them."""

    def __init__(
        self,
        spinner: Spinner | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._clock = clock or datetime.now
        self.start_time = self._clock()
        self.steps = [SyncStep(name, description) for name, description in _DEFAULT_STEPS]
        self.spinner = spinner if spinner is not None else Spinner()

    def _find(self, step_name: str) -> SyncStep | None:
        return next((step for step in self.steps if step.name == step_name), None)

    def start_step(self, step_name: str) -> None:
        """Mark a step running and show it; unknown names are ignored."""
        step = self._find(step_name)
        if step is None:
            return
        step.status = StepStatus.RUNNING
        step.start_time = self._clock()
        self.spinner.start(step.description)

    def complete_step(self, step_name: str, success: bool) -> None:
        """Mark a step finished, successfully or not; unknown names are ignored."""
        step = self._find(step_name)
        if step is None:
            return
        step.status = StepStatus.SUCCESS if success else StepStatus.FAIL
        step.end_time = self._clock()
        if success:
            self.spinner.stop_success()
        else:
            self.spinner.stop_fail()

    def skip_step(self, step_name: str) -> None:
        """Mark a step skipped without showing anything."""
        step = self._find(step_name)
        if step is not None:
            step.status = StepStatus.SKIP

    def summary(self) -> str:
        """Return the elapsed time and the outcome of every step."""
        elapsed = _format_duration(self._clock() - self.start_time)
        lines = [f"\n{bold('Summary:')} Sync completed in {elapsed}\n\n"]
        marks = {
            StepStatus.SUCCESS: green("✓"),
            StepStatus.FAIL: red("✗"),
            StepStatus.SKIP: gray("-"),
        }
        for step in self.steps:
            mark = marks.get(step.status, yellow("?"))
            lines.append(f"{mark} {step.description}\n")
        return "".join(lines)

    def show_optimization_tip(self) -> None:
        """Suggest git optimisations when the sync took more than five seconds."""
        elapsed = self._clock() - self.start_time
        if elapsed <= _SLOW_SYNC:
            return
        print(
            f"\n{yellow('Tip:')} Sync took {bold(_format_duration(elapsed))}. "
            "Enable optimizations with:"
        )
        print("  sage config set experimental.commit-graph true")
        print("  sage config set experimental.fsmonitor true")