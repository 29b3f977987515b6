# main.py

"""
Orchestrator: read params (JSON + CLI), count files, copy the tree with a progress bar.
"""
from __future__ import annotations
import argparse
import json
import os
import sys
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Tuple

from treecopy.copier import BUFFER_SIZE, DIR_MODE, CopyContext, copy_file, copy_tree
from treecopy.model import EntryKind, ProgressState
from treecopy.paths import directory_target, file_target, is_within
from treecopy.progress import BAR_WIDTH, render_progress
from treecopy.report import describe, write_csv
from treecopy.walk import kind_of, scan


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        print(f"[ERR] {message}", file=sys.stderr)
        raise SystemExit(1)


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}
    if not isinstance(data, dict):
        print(f"[WARN] Ignoring config {path}: expected a JSON object", file=sys.stderr)
        return {}
    return data


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = _ArgumentParser(
        prog="treecopy",
        description="Recursively copy a file or directory tree with a progress bar.",
    )
    p.add_argument("source", help="File or directory to copy.")
    p.add_argument("destination", help="Target directory, or target file path for a single file.")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    p.add_argument("--report", type=str, help="Write per-item failures to this CSV file.")
    p.add_argument("--strict", action="store_true", help="Exit with status 3 if any item failed to copy.")
    p.add_argument("--chunk-size", type=int, help=f"Copy buffer size in bytes (default: {BUFFER_SIZE}).")
    p.add_argument("--bar-width", type=int, help=f"Progress bar width in cells (default: {BAR_WIDTH}).")
    return p.parse_args(argv)


def _get_effective_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the JSON configuration; CLI flags are applied over it afterwards."""
    script_dir = Path(__file__).parent
    default_config_path = script_dir / "params.json"
    config_path = Path(args.config) if args.config else default_config_path
    if args.config and not config_path.exists():
        print(f"[WARN] Config not found: {config_path}", file=sys.stderr)
    return load_config(config_path if config_path.exists() else None)


def _positive_int(name: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if number < 1:
        print(f"[ERR] {name} must be a positive integer, got {value!r}", file=sys.stderr)
        raise SystemExit(1)
    return number


def _resolve_options(args: argparse.Namespace, cfg: Dict[str, Any]) -> Tuple[int, int, Path | None, bool]:
    """Resolve chunk size, bar width, report path and strict mode."""
    chunk_size = _positive_int(
        "chunk_size", args.chunk_size if args.chunk_size is not None else cfg.get("chunk_size", BUFFER_SIZE)
    )
    bar_width = _positive_int(
        "bar_width", args.bar_width if args.bar_width is not None else cfg.get("bar_width", BAR_WIDTH)
    )
    report = args.report or cfg.get("report")
    report_path = Path(report) if report else None
    strict = bool(args.strict or cfg.get("strict", False))
    return chunk_size, bar_width, report_path, strict


def _copy_directory_source(source: str, destination: str, ctx: CopyContext) -> int:
    """Create ``destination/basename(source)`` once and mirror the tree into it."""
    target = directory_target(source, destination)
    if target is None:
        print("[ERR] destination path too long", file=sys.stderr)
        return 1
    if is_within(target, source):
        print(f"[ERR] cannot copy '{source}' into itself ('{target}')", file=sys.stderr)
        return 1
    try:
        os.mkdir(target, DIR_MODE)
    except FileExistsError:
        pass
    except OSError as exc:
        print(f"[ERR] mkdir '{target}': {describe(exc)}", file=sys.stderr)
        return 1
    copy_tree(source, target, ctx)
    return 0


def _copy_file_source(source: str, destination: str, ctx: CopyContext) -> int:
    """Copy a single file into a directory or onto an explicit path."""
    target = file_target(source, destination)
    if target is None:
        print("[ERR] destination path too long", file=sys.stderr)
        return 1
    if os.path.exists(target) and os.path.samefile(source, target):
        print(f"[ERR] '{source}' and '{target}' are the same file", file=sys.stderr)
        return 1
    copy_file(source, target, ctx)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    cfg = _get_effective_config(args)
    chunk_size, bar_width, report_path, strict = _resolve_options(args, cfg)
    source, destination = args.source, args.destination

    try:
        st = os.stat(source)
    except OSError as exc:
        print(f"[ERR] stat '{source}': {describe(exc)}", file=sys.stderr)
        return 1

    kind = kind_of(st)
    # rejected before the scan, so a FIFO or device source exits 1 rather than
    # reporting "No files to copy."
    if kind is EntryKind.OTHER:
        print(f"[ERR] unsupported source type: '{source}'", file=sys.stderr)
        return 1

    state = ProgressState()
    scan(source, state)
    if state.total_files == 0:
        print("No files to copy.")
        return 0

    ctx = CopyContext(
        state=state,
        chunk_size=chunk_size,
        on_progress=partial(render_progress, width=bar_width),
    )
    if kind is EntryKind.DIRECTORY:
        code = _copy_directory_source(source, destination, ctx)
    else:
        code = _copy_file_source(source, destination, ctx)
    if code:
        return code

    print("\nDone.")
    if report_path:
        write_csv(report_path, ctx.failures)
        print(f"[INFO] Report: {report_path.resolve()}")

    if strict and ctx.failures:
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
