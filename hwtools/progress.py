"""A console progress bar and terminal size detection."""

from __future__ import annotations

import subprocess
import sys
from typing import TextIO

PERCENTS_WIDTH = 4
MIN_WIDTH = 4 + PERCENTS_WIDTH  # the width of "[#] 100%"


class WriteLimitExceeded(Exception):
    """More bytes were written than the bar's total allows."""

    def __init__(self, written: int, message: str = "write limit exceed") -> None:
        super().__init__(message)
        self.written = written


class ProgressBar:
    """Draws ``[###..] 65%`` on ``out`` as bytes are written through it."""

    def __init__(self, total: int, out: TextIO | None = None, width: int = 0) -> None:
        self.total = total
        self.out = out if out is not None else sys.stdout
        self.width = max(width, MIN_WIDTH)
        self.read = 0

    def write(self, data: bytes) -> int:
        """Account for ``data`` and redraw; return the number of bytes taken."""
        size = len(data)
        left = self.total - (self.read + size)
        if left < 0:
            raise WriteLimitExceeded(size + left)
        self.read += size
        self._draw()
        return size

    def reset(self) -> None:
        self.read = 0

    def _draw(self) -> None:
        bar_width = self.width - PERCENTS_WIDTH - 3  # minus "[] "
        if self.total > 0:
            done = bar_width * self.read // self.total
            percent = 100 * self.read // self.total
        else:
            done, percent = bar_width, 100
        line = f"\r[{'#' * done}{'.' * (bar_width - done)}] {percent}%"
        if self.read == self.total:
            line += "\n"
        self.out.write(line)
        flush = getattr(self.out, "flush", None)
        if flush is not None:
            flush()


def parse_terminal_size(text: bytes | str) -> tuple[int, int]:
    """Parse ``stty size`` output (``"rows cols"``) into ``(width, height)``."""
    if isinstance(text, bytes):
        text = text.decode()
    parts = text.strip("\n").split(" ")
    try:
        height = int(parts[0])
    except ValueError as exc:
        raise ValueError(f"parse term height error: {exc}") from exc
    try:
        width = int(parts[1])
    except (IndexError, ValueError) as exc:
        raise ValueError(f"parse term width error: {exc}") from exc
    return width, height


def terminal_size() -> tuple[int, int]:
    """Return ``(width, height)`` of the terminal attached to stdin."""
    try:
        result = subprocess.run(
            ["stty", "size"], stdin=sys.stdin, capture_output=True, check=True
        )
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        raise OSError(f"get term size error: {exc}") from exc
    return parse_terminal_size(result.stdout)