# treecopy/copier.py

"""
Copy pass: mirror directories and stream regular files, advancing progress.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .model import CopyFailure, CopyTask, EntryKind, ProgressState
from .paths import compose
from .policy import Failure, Outcome, Pass, outcome
from .report import describe, report_failure
from .walk import classify

BUFFER_SIZE = 8192
DIR_MODE = 0o755


@dataclass
class CopyContext:
    """Everything the copy pass shares across files and directories."""
    state: ProgressState
    chunk_size: int = BUFFER_SIZE
    on_progress: Optional[Callable[[ProgressState], None]] = None
    failures: List[CopyFailure] = field(default_factory=list)

    def fail(self, failure: Failure, path: str, error: str) -> None:
        """Record and report a per-item failure, unless the policy ignores it."""
        if outcome(Pass.COPY, failure) is Outcome.IGNORE:
            return
        record = CopyFailure(action=failure.value, path=path, error=error)
        self.failures.append(record)
        report_failure(record)

    def file_copied(self) -> None:
        self.state.advance()
        if self.on_progress is not None:
            self.on_progress(self.state)


def copy_file(src: str, dst: str, ctx: CopyContext) -> bool:
    """Copy one regular file's bytes, truncating any existing destination.

    Progress advances only when every chunk was written in full. Both handles
    are closed on every path out of this function.

    Args:
        src (str): Source file path.
        dst (str): Destination file path (its parent must exist).
        ctx (CopyContext): Shared copy state.

    Returns:
        bool: True if the file was copied.
    """
    try:
        fsrc = open(src, "rb")
    except OSError as exc:
        ctx.fail(Failure.OPEN_SOURCE, src, describe(exc))
        return False

    with fsrc:
        try:
            # unbuffered, so write() reports what the OS actually accepted
            fdst = open(dst, "wb", buffering=0)
        except OSError as exc:
            ctx.fail(Failure.OPEN_DEST, dst, describe(exc))
            return False

        with fdst:
            while True:
                try:
                    chunk = fsrc.read(ctx.chunk_size)
                except OSError as exc:
                    ctx.fail(Failure.READ, src, describe(exc))
                    return False
                if not chunk:
                    break
                try:
                    written = fdst.write(chunk)
                except OSError as exc:
                    ctx.fail(Failure.WRITE, dst, describe(exc))
                    return False
                if written != len(chunk):
                    ctx.fail(Failure.WRITE, dst, f"short write ({written} of {len(chunk)} bytes)")
                    return False

    ctx.file_copied()
    return True


def _make_dir(path: str, ctx: CopyContext) -> bool:
    try:
        os.mkdir(path, DIR_MODE)
    except FileExistsError:
        pass
    except OSError as exc:
        ctx.fail(Failure.MKDIR, path, describe(exc))
        return False
    return True


def _copy_directory(task: CopyTask, ctx: CopyContext) -> Optional[List[CopyTask]]:
    """Create one destination directory and copy its files.

    Returns the subdirectory tasks still to process, or None if the directory
    could not be created or listed.
    """
    if not _make_dir(task.dst, ctx):
        return None
    try:
        names = os.listdir(task.src)
    except OSError as exc:
        ctx.fail(Failure.LISTDIR, task.src, describe(exc))
        return None

    subdirs: List[CopyTask] = []
    for name in names:
        child_src = compose(task.src, name)
        child_dst = compose(task.dst, name)
        if child_src is None or child_dst is None:
            ctx.fail(Failure.PATH_TOO_LONG, os.path.join(task.src, name), "path too long")
            continue

        try:
            entry = classify(child_src)
        except OSError as exc:
            ctx.fail(Failure.STAT, child_src, describe(exc))
            continue

        if entry.kind is EntryKind.DIRECTORY:
            subdirs.append(CopyTask(child_src, child_dst))
        elif entry.kind is EntryKind.REGULAR_FILE:
            copy_file(child_src, child_dst, ctx)
        else:
            ctx.fail(Failure.UNSUPPORTED_KIND, child_src, entry.kind.value)
    return subdirs


def copy_tree(src_dir: str, dst_dir: str, ctx: CopyContext) -> bool:
    """Mirror a directory tree under ``dst_dir``.

    Directories are processed from an explicit work-list. A failure inside a
    subtree is reported and skips that subtree only.

    Args:
        src_dir (str): Source directory.
        dst_dir (str): Destination directory, created if missing.
        ctx (CopyContext): Shared copy state.

    Returns:
        bool: False if ``dst_dir`` itself could not be created or ``src_dir`` listed.
    """
    root = CopyTask(src_dir, dst_dir)
    pending: List[CopyTask] = [root]
    ok = True
    while pending:
        task = pending.pop()
        subdirs = _copy_directory(task, ctx)
        if subdirs is None:
            if task is root:
                ok = False
            continue
        # reversed so subdirectories are visited in listing order
        pending.extend(reversed(subdirs))
    return ok
