"""CLI entrypoint for extlint."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_config
from .errors import ArchiveError, UsageError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extlint",
        description="Normalize the scripts, JSON, HTML and CSS inside a browser-extension zip.",
    )
    parser.add_argument(
        "archive",
        help="Path to the extension archive (.zip) to normalize.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to .extlint.yml or its directory (defaults to the current directory).",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="File name prefix for the output archive (defaults to 'linted_').",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for extlint."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(args.config if args.config is not None else Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.prefix:
        if "/" in args.prefix or "\\" in args.prefix:
            parser.exit(2, "--prefix must be a file name prefix, not a path\n")
        config = replace(config, output_prefix=args.prefix)

    orchestrator = Orchestrator(config)
    try:
        result = orchestrator.run(args.archive)
    except UsageError as exc:
        parser.exit(1, f"{exc}\n")
    except ArchiveError as exc:
        parser.exit(1, f"extlint failed: {exc}\nRun with --verbose for more details.\n")

    print(f"Linted zip created: {_relativize(result.output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
