# treecopy/model.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class EntryKind(Enum):
    """Classification of a filesystem path."""
    REGULAR_FILE = "file"
    DIRECTORY = "dir"
    OTHER = "other"   # symlinks, devices, sockets, FIFOs


@dataclass(frozen=True)
class FileSystemEntry:
    """A path together with its kind."""
    path: str
    kind: EntryKind


@dataclass
class ProgressState:
    """The progress counter pair shared by the scan and copy passes."""
    total_files: int = 0   # set by the scan, read-only afterwards
    copied_files: int = 0  # one increment per successfully copied file

    def advance(self) -> None:
        self.copied_files += 1


@dataclass(frozen=True)
class CopyTask:
    """A pending (source, destination) pair on the copy work-list."""
    src: str
    dst: str


@dataclass(frozen=True)
class CopyFailure:
    """Represents a row in the failure report CSV."""
    action: str  # a policy.Failure value, e.g. "open source" or "path too long"
    path: str
    error: str
