# treecopy/report.py

from __future__ import annotations
import csv
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .model import CopyFailure


def describe(exc: OSError) -> str:
    """Return the system error description carried by an OSError."""
    return exc.strerror or str(exc)


def report_failure(failure: CopyFailure, stream: Optional[TextIO] = None) -> None:
    """Print a per-item failure line to stderr, tagged with the offending path."""
    out = stream if stream is not None else sys.stderr
    print(f"[ERR] {failure.action} '{failure.path}': {failure.error}", file=out)


def write_csv(out_path: Path, failures: Iterable[CopyFailure]) -> None:
    """Write per-item copy failures to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        failures (Iterable[CopyFailure]): Failures recorded during the copy pass.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["action", "path", "error"])
        for r in failures:
            writer.writerow([r.action, r.path, r.error])
