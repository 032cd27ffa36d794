"""
Live progress reporting for long renders.

The monitor runs on its own thread and only ever reads the pixel
counter, so the workers never wait on it.
"""

import sys
import threading
from typing import Callable, Optional, TextIO


def progress_bar(
    current: int,
    total: int,
    width: int = 35,
    stream: Optional[TextIO] = None,
    unit: str = "pixel",
):
    """Redraw a progress bar in place on a terminal."""
    stream = stream or sys.stdout
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    stream.write(f"\r[{bar}] {pct:5.1f}%  {unit} {current}/{total}")
    stream.flush()


class ProgressMonitor:
    """
    Samples a progress counter and draws a bar until told to stop.

    `read_count` must be cheap and non-blocking; it is called once per
    polling interval. On a terminal the bar is redrawn in place, otherwise
    a line is printed every 5%.
    """

    def __init__(
        self,
        read_count: Callable[[], int],
        total: int,
        interval: float = 0.2,
        stream: Optional[TextIO] = None,
    ):
        self.read_count = read_count
        self.total = total
        self.interval = interval
        self.stream = stream or sys.stdout

        self.samples = 0
        self.last_count = 0
        self._last_bucket = -1
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "ProgressMonitor":
        if self._thread is not None:
            raise RuntimeError("ProgressMonitor can only be started once")
        self._thread = threading.Thread(
            target=self._run, name="basinscope-progress", daemon=True
        )
        self._thread.start()
        return self

    def stop(self, timeout: float | None = None):
        """Send the stop signal and wait for the monitor thread to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> "ProgressMonitor":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def _run(self):
        while True:
            self._draw(self.read_count())
            if self._stop.is_set():
                break
            self._stop.wait(self.interval)
        self._finish()

    def _draw(self, current: int):
        self.samples += 1
        self.last_count = current
        if self._is_tty():
            progress_bar(current, self.total, stream=self.stream)
            return

        bucket = int(current * 20 / max(self.total, 1))
        if bucket != self._last_bucket:
            self._last_bucket = bucket
            pct = current / max(self.total, 1) * 100
            print(f"{pct:5.1f}%  pixel {current}/{self.total}", file=self.stream, flush=True)

    def _finish(self):
        if self._is_tty():
            self.stream.write("\n")
            self.stream.flush()

    def _is_tty(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())
