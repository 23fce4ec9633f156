"""CLI entrypoint for ngfilesort."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import BinaryIO, List, Sequence

from .config import ConfigError, load_config
from .errors import FileSortError
from .logging import configure_logging, get_logger
from .models import SourceFile
from .scanner import FileScanner
from .stream import sort_files


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngfilesort",
        description="Order AngularJS sources so every module is declared before it is used.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory containing the sources (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .ngfilesort.yml (defaults to the one in the source directory).",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        dest="patterns",
        action="append",
        default=None,
        metavar="GLOB",
        help="Ordering pattern for files the module graph leaves unordered; repeatable.",
    )
    parser.add_argument(
        "--concat",
        default=None,
        metavar="OUTPUT",
        help="Write the sorted files concatenated to OUTPUT ('-' for stdout).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ngfilesort."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    source_dir = Path(args.path)
    try:
        config = load_config(Path(args.config) if args.config else source_dir)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    patterns = args.patterns if args.patterns else config.order_patterns
    scanner = FileScanner(extensions=config.extensions, exclude_paths=config.exclude_paths)

    try:
        files = scanner.scan(source_dir)
        ordered = sort_files(files, patterns)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except FileSortError as exc:
        parser.exit(1, f"ngfilesort failed: {exc}\nRun with --verbose for more details.\n")

    logger.debug("Emitting %d file(s)", len(ordered))
    if args.concat is None:
        for file in ordered:
            print(file.relative)
    elif args.concat == "-":
        _concatenate(ordered, sys.stdout.buffer)
        sys.stdout.flush()
    else:
        with open(args.concat, "wb") as handle:
            _concatenate(ordered, handle)
        logger.info("Wrote %d file(s) to %s", len(ordered), args.concat)


def _concatenate(files: Sequence[SourceFile], handle: BinaryIO) -> None:
    chunks: List[bytes] = []
    for file in files:
        data = file.read_bytes()
        if data and not data.endswith(b"\n"):
            data += b"\n"
        chunks.append(data)
    handle.write(b"".join(chunks))


if __name__ == "__main__":
    main(sys.argv[1:])
