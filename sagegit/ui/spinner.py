"""A terminal progress spinner."""

from __future__ import annotations

import itertools
import sys
import threading
from typing import TextIO

FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class Spinner:
    """Animates a spinner followed by a message while work is in progress.

    The animation only runs when the stream is a terminal; the final
    success or failure line is always written.
    """

    def __init__(self, stream: TextIO | None = None, interval: float = 0.1) -> None:
        self._stream = stream
        self.interval = interval
        self.suffix = " "
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._width = 0

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def active(self) -> bool:
        return self._thread is not None

    def start(self, msg: str) -> None:
        """Show the spinner with ``msg`` after it."""
        self.suffix = " " + msg
        if self._thread is not None:
            return
        stream = self.stream
        isatty = getattr(stream, "isatty", None)
        if not (callable(isatty) and isatty()):
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, args=(stream,), daemon=True)
        self._thread.start()

    def _spin(self, stream: TextIO) -> None:
        for frame in itertools.cycle(FRAMES):
            line = f"{frame}{self.suffix}"
            stream.write("\r" + line)
            stream.flush()
            self._width = max(self._width, len(line))
            if self._stop_event.wait(self.interval):
                break

    def stop(self) -> None:
        """Stop the animation and clear its line."""
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        thread.join()
        self._thread = None
        stream = self.stream
        stream.write("\r" + " " * self._width + "\r")
        stream.flush()
        self._width = 0

    def stop_success(self) -> None:
        """Stop and print the message with a success mark."""
        self.stop()
        print(f"✓ {self.suffix.strip()}", file=self.stream, flush=True)

    def stop_fail(self) -> None:
        """Stop and print the message with a failure mark."""
        self.stop()
        print(f"✗ {self.suffix.strip()}", file=self.stream, flush=True)