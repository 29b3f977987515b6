# treecopy/walk.py

from __future__ import annotations
import os
import stat
from typing import List, Tuple

from .model import CopyFailure, EntryKind, FileSystemEntry, ProgressState
from .paths import compose
from .policy import Failure, Outcome, Pass, outcome
from .report import describe, report_failure


def kind_of(st: os.stat_result) -> EntryKind:
    """Map a stat result to an entry kind."""
    if stat.S_ISREG(st.st_mode):
        return EntryKind.REGULAR_FILE
    if stat.S_ISDIR(st.st_mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER


def classify(path: str, follow_symlinks: bool = False) -> FileSystemEntry:
    """Classify a path. Symlinks are OTHER unless ``follow_symlinks`` is set.

    Raises:
        OSError: If the metadata query fails.
    """
    st = os.stat(path) if follow_symlinks else os.lstat(path)
    return FileSystemEntry(path=path, kind=kind_of(st))


def _skip(failure: Failure, path: str, error: str) -> None:
    """Skip a node during the scan, reporting it only if the policy says so."""
    if outcome(Pass.SCAN, failure) is Outcome.REPORT:
        report_failure(CopyFailure(action=failure.value, path=path, error=error))


def scan(root: str, state: ProgressState) -> None:
    """Count the regular files reachable from a path into ``state.total_files``.

    The root is resolved through symlinks, nested entries are not. Entries
    that cannot be queried, directories that cannot be listed, children whose
    path would be too long and entries of other kinds are skipped; whether a
    skip is reported is decided by the scan rows of ``policy.DECISIONS``.

    Args:
        root (str): File or directory to scan.
        state (ProgressState): Counter pair receiving the total.

    Returns:
        None
    """
    pending: List[Tuple[str, bool]] = [(root, True)]
    while pending:
        path, follow = pending.pop()
        try:
            entry = classify(path, follow_symlinks=follow)
        except OSError as exc:
            _skip(Failure.STAT, path, describe(exc))
            continue

        if entry.kind is EntryKind.REGULAR_FILE:
            state.total_files += 1
        elif entry.kind is EntryKind.DIRECTORY:
            try:
                names = os.listdir(path)
            except OSError as exc:
                _skip(Failure.LISTDIR, path, describe(exc))
                continue
            for name in names:
                child = compose(path, name)
                if child is None:
                    _skip(Failure.PATH_TOO_LONG, os.path.join(path, name), "path too long")
                    continue
                pending.append((child, False))
        else:
            _skip(Failure.UNSUPPORTED_KIND, path, entry.kind.value)
