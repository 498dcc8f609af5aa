"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from nword import build, query

log = logging.getLogger(__name__)

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}


def _level(value: str) -> int:
    try:
        return _LEVELS[value.strip().lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"unknown log level {value!r}; choose from {', '.join(_LEVELS)}"
        ) from None


def _unsigned(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``nword`` command."""
    parser = argparse.ArgumentParser(
        prog="nword", description="High-Performance N-gram Processor"
    )
    parser.add_argument(
        "-v", "--verbose", type=_level, default="warn",
        help="Enable verbose output info|warn",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    build_cmd = commands.add_parser("build", help="count n-grams of a token file")
    build_cmd.add_argument("input", help="Input token file")
    build_cmd.add_argument("output_dir", help="Output directory for n-gram files")

    query_cmd = commands.add_parser("query", help="expand queries read from stdin")
    query_cmd.add_argument("database_dir", help="N-gram database directory")
    query_cmd.add_argument("-s", "--suffix-mode", action="store_true", help="suffix search")
    query_cmd.add_argument("-p", "--prefix-mode", action="store_true", help="prefix search")
    query_cmd.add_argument(
        "-f", "--freq-min", type=_unsigned, default=4, help="frequency minimum"
    )
    query_cmd.add_argument(
        "-m", "--max-depth", type=_unsigned, default=2, help="max depth"
    )
    return parser


def _configure_logging(level: int) -> None:
    package_log = logging.getLogger("nword")
    for handler in list(package_log.handlers):
        package_log.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(relativeCreated)10.0fms %(levelname)s %(name)s: %(message)s")
    )
    package_log.addHandler(handler)
    package_log.setLevel(level)
    package_log.propagate = False


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    started = time.perf_counter()
    status = 0
    if args.command == "build":
        try:
            build.run(args.input, args.output_dir)
        except OSError as err:
            print(f"Error: {err}", file=sys.stderr)
            status = 1
    else:
        opts = query.Options(
            prefix_mode=args.prefix_mode,
            suffix_mode=args.suffix_mode,
            freq_min=args.freq_min,
            max_depth=args.max_depth,
        )
        # prefix search unless a mode was chosen
        opts.prefix_mode |= not opts.suffix_mode and not opts.prefix_mode
        log.info("%r", opts)
        try:
            query.run(args.database_dir, opts)
        except BrokenPipeError:
            pass
        except (OSError, ValueError) as err:
            print(f"Error: {err}", file=sys.stderr)
            status = 1
    log.info("Finished in %.2fs", time.perf_counter() - started)
    return status


if __name__ == "__main__":
    sys.exit(main())