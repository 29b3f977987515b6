# treecopy/progress.py

from __future__ import annotations
import sys
from typing import Optional, TextIO

from .model import ProgressState

BAR_WIDTH = 40


def render_bar(state: ProgressState, width: int = BAR_WIDTH) -> str:
    """Build the progress line for a counter pair (without the leading carriage return)."""
    percent = state.copied_files / state.total_files * 100.0
    pos = int(percent / 100.0 * width)
    cells = "".join(
        "=" if i < pos else ">" if i == pos else " "
        for i in range(width)
    )
    return f"[{cells}] {percent:6.2f}% ({state.copied_files}/{state.total_files} files)"


def render_progress(state: ProgressState, stream: Optional[TextIO] = None, width: int = BAR_WIDTH) -> None:
    """Overwrite the current terminal line with the progress bar. No-op when nothing was scanned."""
    if state.total_files == 0:
        return
    out = stream if stream is not None else sys.stdout
    out.write("\r" + render_bar(state, width))
    out.flush()
