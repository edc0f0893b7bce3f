import io
import re
from datetime import datetime, timedelta

from sagegit.ui.spinner import Spinner
from sagegit.ui.sync_progress import StepStatus, SyncProgress

_ANSI = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_progress():
    stream = io.StringIO()
    clock = FakeClock()
    progress = SyncProgress(spinner=Spinner(stream=stream), clock=clock)
    return progress, stream, clock


def test_all_steps_start_pending():
    progress, _, clock = make_progress()
    assert [s.name for s in progress.steps] == [
        "verify", "stash", "fetch", "integrate", "push", "restore",
    ]
    assert all(s.status is StepStatus.PENDING for s in progress.steps)
    assert progress.start_time == clock.now


def test_start_and_complete_step():
    progress, stream, clock = make_progress()
    progress.start_step("verify")
    step = progress.steps[0]
    assert step.status is StepStatus.RUNNING
    assert step.start_time == clock.now
    clock.advance(seconds=1)
    progress.complete_step("verify", True)
    assert step.status is StepStatus.SUCCESS
    assert step.end_time == clock.now
    assert stream.getvalue() == f"✓ {step.description}\n"


def test_failed_step():
    progress, stream, _ = make_progress()
    progress.start_step("fetch")
    progress.complete_step("fetch", False)
    step = progress.steps[2]
    assert step.status is StepStatus.FAIL
    assert stream.getvalue() == f"✗ {step.description}\n"


def test_skip_is_silent():
    progress, stream, _ = make_progress()
    progress.skip_step("stash")
    assert progress.steps[1].status is StepStatus.SKIP
    assert stream.getvalue() == ""


def test_unknown_step_changes_nothing():
    progress, stream, _ = make_progress()
    progress.start_step("nope")
    progress.complete_step("nope", True)
    progress.skip_step("nope")
    assert all(s.status is StepStatus.PENDING for s in progress.steps)
    assert stream.getvalue() == ""


def test_summary_lists_every_step():
    progress, _, clock = make_progress()
    progress.start_step("verify")
    progress.complete_step("verify", True)
    progress.skip_step("stash")
    progress.start_step("fetch")
    progress.complete_step("fetch", False)
    clock.advance(milliseconds=1500)
    text = _ANSI.sub("", progress.summary())
    assert "Summary: Sync completed in 1.5s" in text
    assert "✓ Repository verification\n" in text
    assert "- Work in progress\n" in text
    assert "✗ Fetching updates\n" in text
    assert "? Restoring work\n" in text
    assert text.count("\n") == 3 + len(progress.steps)


def test_summary_sub_second_duration():
    progress, _, clock = make_progress()
    clock.advance(milliseconds=250)
    assert "Sync completed in 250ms" in _ANSI.sub("", progress.summary())


def test_optimization_tip_when_slow(capsys):
    progress, _, clock = make_progress()
    clock.advance(seconds=6)
    progress.show_optimization_tip()
    out = _ANSI.sub("", capsys.readouterr().out)
    assert "Sync took 6s" in out
    assert "sage config set experimental.commit-graph true" in out
    assert "sage config set experimental.fsmonitor true" in out


def test_no_tip_when_fast(capsys):
    progress, _, clock = make_progress()
    clock.advance(seconds=5)
    progress.show_optimization_tip()
    assert capsys.readouterr().out == ""