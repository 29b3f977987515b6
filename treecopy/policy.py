# treecopy/policy.py

"""
Decision table for traversal failures.

Each failure met while walking or copying a tree is either reported (written to
stderr and recorded for the failure report, then the node is skipped) or
ignored (skipped without a trace). The scan pass ignores everything; the copy
pass reports everything except entries of an unsupported kind.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Tuple


class Pass(Enum):
    SCAN = "scan"
    COPY = "copy"


class Failure(Enum):
    """Kinds of per-node failure. Values double as the action label in error lines."""
    STAT = "stat"
    LISTDIR = "opendir"
    PATH_TOO_LONG = "path too long"
    UNSUPPORTED_KIND = "unsupported"
    MKDIR = "mkdir"
    OPEN_SOURCE = "open source"
    OPEN_DEST = "open dest"
    READ = "read"
    WRITE = "write"


class Outcome(Enum):
    REPORT = "report"
    IGNORE = "ignore"


DECISIONS: Dict[Tuple[Pass, Failure], Outcome] = {
    (Pass.SCAN, Failure.STAT): Outcome.IGNORE,
    (Pass.SCAN, Failure.LISTDIR): Outcome.IGNORE,
    (Pass.SCAN, Failure.PATH_TOO_LONG): Outcome.IGNORE,
    (Pass.SCAN, Failure.UNSUPPORTED_KIND): Outcome.IGNORE,
    (Pass.COPY, Failure.STAT): Outcome.REPORT,
    (Pass.COPY, Failure.LISTDIR): Outcome.REPORT,
    (Pass.COPY, Failure.PATH_TOO_LONG): Outcome.REPORT,
    (Pass.COPY, Failure.UNSUPPORTED_KIND): Outcome.IGNORE,
    (Pass.COPY, Failure.MKDIR): Outcome.REPORT,
    (Pass.COPY, Failure.OPEN_SOURCE): Outcome.REPORT,
    (Pass.COPY, Failure.OPEN_DEST): Outcome.REPORT,
    (Pass.COPY, Failure.READ): Outcome.REPORT,
    (Pass.COPY, Failure.WRITE): Outcome.REPORT,
}


def outcome(phase: Pass, failure: Failure) -> Outcome:
    """Look up what to do with a failure; unknown combinations are reported."""
    return DECISIONS.get((phase, failure), Outcome.REPORT)
