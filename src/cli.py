"""Command-line interface for symbolgraph-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import generate_batch, write_file_output
from contract.validation import validate_artifacts, validate_output
from rules.config import ConfigError, load_config
from verify.verify import verify_determinism, verify_file_output

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Workspace root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="symbolgraph")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: config log_level)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract the symbols of one file"
    )
    extract_parser.add_argument("root", help="Workspace root")
    extract_parser.add_argument("file", help="Source file to extract")
    extract_parser.add_argument("output", help="Destination JSON file")
    extract_parser.add_argument(
        "original_file_path",
        nargs="?",
        default=None,
        help="Display path recorded on every symbol (default: FILE)",
    )

    batch_parser = subparsers.add_parser(
        "batch", help="Extract every source file of a workspace"
    )
    _add_common_paths(batch_parser)
    batch_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for symbols.jsonl (default: config output dir)",
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Validate an extract JSON, a symbols.jsonl or a batch directory"
    )
    validate_parser.add_argument("output", help="Output file or directory")

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of outputs"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "file", nargs="?", default=None, help="Source file of a single extract"
    )
    verify_parser.add_argument(
        "output", nargs="?", default=None, help="Extract JSON written for FILE"
    )
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Batch artifacts directory (default: config output dir)",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, force=True)


def _resolve_path(path: str) -> Path:
    return Path(path).expanduser().resolve()


def _handle_extract(
    root: Path, file: str, output: str, original_file_path: str | None
) -> int:
    file_path = _resolve_path(file)
    records = write_file_output(
        root=root,
        file_path=file_path,
        output=_resolve_path(output),
        original_file_path=original_file_path or str(file_path),
    )
    logger.info("Wrote %d symbols to %s", len(records), output)
    return 0


def _handle_batch(root: Path, out_dir: str | None) -> int:
    resolved_out_dir = _resolve_path(out_dir) if out_dir is not None else None
    summary = generate_batch(root=root, out_dir=resolved_out_dir)
    failed = summary["failed"]
    if failed:
        for path in failed:
            sys.stderr.write(f"failed: {path}\n")
        return 1
    return 0


def _handle_validate(output: str) -> int:
    path = _resolve_path(output)
    result = validate_artifacts(path) if path.is_dir() else validate_output(path)
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(
    root: Path, file: str | None, output: str | None, artifacts_dir: str | None
) -> int:
    try:
        if file is not None:
            if output is None:
                sys.stderr.write("error: verify FILE requires OUTPUT\n")
                return 2
            file_path = _resolve_path(file)
            result = verify_file_output(
                root=root,
                file_path=file_path,
                output=_resolve_path(output),
                original_file_path=str(file_path),
            )
        else:
            if artifacts_dir is None:
                resolved_dir = (root / load_config(root).output_dir).resolve()
            else:
                resolved_dir = _resolve_path(artifacts_dir)
            result = verify_determinism(root=root, artifacts_dir=resolved_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "validate":
        _configure_logging(args.log_level or "WARNING")
        return _handle_validate(args.output)

    root = _resolve_path(args.root)
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    _configure_logging(args.log_level or config.log_level)

    try:
        if args.command == "extract":
            return _handle_extract(
                root, args.file, args.output, args.original_file_path
            )

        if args.command == "batch":
            return _handle_batch(root, args.out_dir)

        if args.command == "verify":
            return _handle_verify(root, args.file, args.output, args.artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
