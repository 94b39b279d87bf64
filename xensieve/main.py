#!/usr/bin/env python3
"""
xensieve.main — Command-line interface for xensieve.

Usage
-----
    python -m xensieve parse     "3@0|5@1" [--postfix] [--residuals] [--merge]
    python -m xensieve contains  "3@0|5@1" 6 7 8
    python -m xensieve values    "3@0|5@1" --start 0 --stop 15
    python -m xensieve states    "3@0|5@1" --stop 8 --format json
    python -m xensieve intervals "3@0|5@1" --stop 30

Global options
--------------
    -v / --verbose          Increase log verbosity (-v INFO, -vv DEBUG).
    --element-type NAME     Integer width: i8 … i128, u8 … u128 (default i128).
    --inverse {search,euclid}
                            Modular inverse strategy used when merging.
    --version               Print version and exit.

Exit codes
----------
    0   Success.
    1   The notation or a value was rejected.
    2   Usage error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, List, Optional, Sequence

from xensieve import __version__
from xensieve.config import SieveConfig
from xensieve.congruence import InverseStrategy
from xensieve.elements import ELEMENT_TYPES
from xensieve.errors import SieveError
from xensieve.parser import infix_to_postfix, tokenize
from xensieve.sieve import Sieve

_log = logging.getLogger("xensieve")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the root ``xensieve`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("xensieve")
    root.setLevel(level)
    # main() may run several times in one process
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)


def _config_from_args(args: argparse.Namespace) -> SieveConfig:
    config = SieveConfig.from_names(args.element_type, args.inverse)
    for warning in config.validate():
        _log.info("config: %s", warning)
    return config


def _nonzero_int(text: str) -> int:
    """argparse ``type=`` for range steps."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value == 0:
        raise argparse.ArgumentTypeError("step must not be 0")
    return value


def _emit(items: Iterable[object], fmt: str) -> None:
    """Write *items* to stdout, one per line or as a JSON array."""
    if fmt == "json":
        json.dump(list(items), sys.stdout)
        sys.stdout.write("\n")
        return
    for item in items:
        if isinstance(item, bool):
            item = "true" if item else "false"
        print(item)


# ===========================================================================
# Subcommands
# ===========================================================================

def cmd_parse(args: argparse.Namespace) -> int:
    """Print the canonical form of a sieve."""
    config = _config_from_args(args)
    sieve = Sieve(args.notation, config)
    if args.merge:
        sieve = sieve.merged()
    print(sieve)
    if args.postfix:
        tokens = infix_to_postfix(tokenize(args.notation, config.element_type), args.notation)
        print(" ".join(t.text for t in tokens))
    if args.residuals:
        for residual in sieve.residuals():
            print(residual)
    return EXIT_OK


def cmd_contains(args: argparse.Namespace) -> int:
    """Report membership of each value."""
    sieve = Sieve(args.notation, _config_from_args(args))
    results = [(value, sieve.contains(value)) for value in args.values]
    if args.format == "json":
        _emit([{"value": v, "member": m} for v, m in results], "json")
    else:
        for value, member in results:
            print(f"{value}: {'true' if member else 'false'}")
    return EXIT_OK


def _cmd_transform(kind: str):
    def run(args: argparse.Namespace) -> int:
        sieve = Sieve(args.notation, _config_from_args(args))
        values = range(args.start, args.stop, args.step)
        _log.info("%s of %s over %s", kind, sieve, values)
        transform = getattr(sieve, f"iter_{kind}")
        _emit(transform(values), args.format)
        return EXIT_OK

    run.__doc__ = f"Print iter_{kind} output over a range."
    return run


cmd_values = _cmd_transform("value")
cmd_states = _cmd_transform("state")
cmd_intervals = _cmd_transform("interval")


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xensieve",
        description="Evaluate Xenakis sieves written in M@S notation.",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count", default=0,
        help="Increase log verbosity (-v INFO, -vv DEBUG).",
    )
    parser.add_argument(
        "--element-type",
        choices=sorted(ELEMENT_TYPES), default=None,
        help="Integer width of sieve values (default: i128).",
    )
    parser.add_argument(
        "--inverse",
        choices=[s.value for s in InverseStrategy], default=None,
        help="Modular inverse strategy for merges (default: search).",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(title="commands", metavar="<command>")

    def _add_format_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--format", choices=("text", "json"), default="text",
            help="Output format (default: text).",
        )

    # parse
    p_parse = subparsers.add_parser("parse", help="Print the canonical form of a sieve.")
    p_parse.add_argument("notation", help="Sieve notation, e.g. '3@0|5@1'.")
    p_parse.add_argument("--postfix", action="store_true", help="Also print the postfix token order.")
    p_parse.add_argument("--residuals", action="store_true", help="Also list the distinct residuals.")
    p_parse.add_argument("--merge", action="store_true", help="Merge residual intersections first.")
    p_parse.set_defaults(func=cmd_parse)

    # contains
    p_contains = subparsers.add_parser("contains", help="Test values for membership.")
    p_contains.add_argument("notation", help="Sieve notation.")
    p_contains.add_argument("values", nargs="+", type=int, metavar="VALUE")
    _add_format_arg(p_contains)
    p_contains.set_defaults(func=cmd_contains)

    # values / states / intervals
    for name, func, help_text in (
        ("values", cmd_values, "Print the members within a range."),
        ("states", cmd_states, "Print true/false for each value in a range."),
        ("intervals", cmd_intervals, "Print the gaps between members within a range."),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("notation", help="Sieve notation.")
        p.add_argument("--start", type=int, default=0, help="First value (default: 0).")
        p.add_argument("--stop", type=int, required=True, help="End of the range (exclusive).")
        p.add_argument("--step", type=_nonzero_int, default=1, help="Range step, not 0 (default: 1).")
        _add_format_arg(p)
        p.set_defaults(func=func)

    return parser


# ===========================================================================
# Main entry-point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the xensieve CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except SieveError as exc:
        _log.debug("rejected: %r", exc)
        print(exc, file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
