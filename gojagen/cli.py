"""CLI entrypoint for gojagen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import GenerationError
from .logging import configure_logging
from .pipeline import BridgeGenerator, GenerateOptions


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gojagen",
        description="Create Go packages that expose a Go package to the goja runtime.",
    )
    parser.add_argument(
        "-b",
        "--base",
        default=".",
        help="Base path the package directory is relative to (defaults to current directory).",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Package directory to bridge, relative to the base path.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Target directory of the generated package.",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        default=None,
        help="Name prefix of the generated package (default: goja_go_).",
    )
    parser.add_argument(
        "-t",
        "--template",
        default=None,
        help="Jinja template file used instead of the built-in goja template.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a .gojagen.yml file (defaults to <base>/.gojagen.yml).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated source instead of writing it.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gojagen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    options = GenerateOptions(
        input_dir=args.input,
        base=Path(args.base),
        output=Path(args.output) if args.output else None,
        prefix=args.prefix,
        template=Path(args.template) if args.template else None,
        config_path=Path(args.config) if args.config else None,
        dry_run=bool(args.dry_run),
    )

    try:
        result = BridgeGenerator().run(options)
    except (GenerationError, ConfigError) as exc:
        parser.exit(1, f"gojagen: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"gojagen: {exc}\nRun with --verbose for more details.\n")

    if result.path is None:
        sys.stdout.write(result.text)
    else:
        print(_relativize(result.path))


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
