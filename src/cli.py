"""Command-line interface for buildgraph."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from artifacts.write import generate_all_artifacts
from contract.validation import validate_artifacts
from logs import configure_logging, shutdown_logging
from project.errors import BuildGraphError
from rules.config import ConfigError, load_config, resolve_output_dir
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Build root holding buildgraph.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="buildgraph")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate_parser = subparsers.add_parser(
        "evaluate", help="Evaluate the build and write graph artifacts"
    )
    _add_common_paths(evaluate_parser)
    evaluate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )
    validate_parser.add_argument(
        "--strict-schema-version",
        action="store_true",
        help="Treat a missing schema_version as an error",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_evaluate(root: Path, out_dir: str | None) -> int:
    resolved_out_dir = _resolve_output_dir(out_dir)
    result = generate_all_artifacts(root=root, out_dir=resolved_out_dir)
    sys.stdout.write(
        f"{result['root']}: {result['module_count']} modules, "
        f"{result['edge_count']} edges\n"
    )
    return 0


def _handle_validate(
    root: Path, artifacts_dir: str | None, *, strict_schema_version: bool
) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(
        resolved_artifacts_dir, strict_schema_version=strict_schema_version
    )
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
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

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=args.verbose, log_file=log_file)

    root = Path(args.root).expanduser().resolve()

    try:
        return _dispatch(args, root)
    finally:
        shutdown_logging()


def _dispatch(args: argparse.Namespace, root: Path) -> int:
    try:
        if args.command == "evaluate":
            return _handle_evaluate(root, args.out_dir)

        if args.command == "validate":
            return _handle_validate(
                root,
                args.artifacts_dir,
                strict_schema_version=args.strict_schema_version,
            )

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir)
    except (ConfigError, BuildGraphError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
