"""CLI entrypoints for docdata commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, validate_artifacts
from .errors import DocDataError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _parse_artifacts(value: str) -> list[str]:
    try:
        return validate_artifacts(value.split(","))
    except ConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docdata",
        description="Generate JSON:API documentation data from Rust save-analysis output.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build data.json and the frontend assets for a crate.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the crate root containing Cargo.toml (defaults to current directory).",
    )
    build_parser.add_argument(
        "--crate",
        default=None,
        help="Exact name of the crate to document (defaults to .docdata.yml or Cargo.toml).",
    )
    build_parser.add_argument(
        "--artifacts",
        type=_parse_artifacts,
        default=None,
        help="Comma-separated outputs to produce: json, assets (defaults to both).",
    )
    build_parser.add_argument(
        "--skip-build",
        action="store_true",
        default=None,
        help="Reuse existing save-analysis data instead of running cargo.",
    )
    build_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docdata commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            outcome = orchestrator.run_build(
                args.path,
                crate=args.crate,
                artifacts=args.artifacts,
                skip_build=args.skip_build,
            )
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except DocDataError as exc:
            parser.exit(1, f"docdata build failed: {exc}\nRun with --verbose for more details.\n")
        if outcome.data_path is not None:
            print(f"JSON written to {_relativize(outcome.data_path)}")
        if outcome.assets:
            print(f"{len(outcome.assets)} assets copied to {_relativize(outcome.output_dir)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
