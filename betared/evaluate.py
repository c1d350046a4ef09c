#!/usr/bin/env python3
"""
Evaluate a λ-calculus term to beta normal form.

TERM words are library names (see --list) or non-negative integers, which
denote Church numerals. Words are applied left to right, so `PLUS 2 3`
evaluates the term `[[PLUS 2] 3]`.
"""

import argparse
import enum
import logging
import sys

from . import library
from .logging import log_exception, setup_color_logging
from .metrics import log_counters
from .reduction import iter_reduce
from .terms import Term, app

logger = logging.getLogger(__name__)


class Verbosity(enum.IntEnum):
    QUIET = 0  # the term and its final form
    SUMMARY = 1  # every step, printed once evaluation is done
    VERBOSE = 2  # every step as it happens, then the summary


def parse_words(words: list[str]) -> Term:
    """Build the application of a sequence of TERM words."""
    terms: list[Term] = []
    for word in words:
        if word.isdecimal():
            terms.append(library.NAT(int(word)))
        else:
            terms.append(library.get(word.upper()))
    return app(*terms)


def evaluate(main: Term, verbosity: Verbosity, max_steps: int | None = None) -> Term:
    """Reduce `main` to a fixpoint, printing progress at the given verbosity."""
    summary: list[str] = []
    if verbosity != Verbosity.SUMMARY:
        print(f"\nMAIN := {main}")
    if verbosity >= Verbosity.SUMMARY:
        summary.append(f"\nMAIN := {main}")

    steps = iter_reduce(main, max_steps=max_steps)
    result = next(steps)
    for result in steps:
        if verbosity >= Verbosity.VERBOSE:
            print(f"\n= {result}")
        if verbosity >= Verbosity.SUMMARY:
            summary.append(f"\n= {result}")

    if verbosity != Verbosity.SUMMARY:
        print(f"\n= {result}")
    if verbosity >= Verbosity.SUMMARY:
        if verbosity >= Verbosity.VERBOSE:
            print("\n\n\nSummary:")
        print("\n".join(summary))
    return result


def main(args: argparse.Namespace) -> int:
    if args.list:
        for name in library.names():
            print(name)
        return 0

    try:
        term = parse_words(args.term)
    except (KeyError, ValueError) as e:
        parser.error(str(e.args[0]))

    sys.setrecursionlimit(max(sys.getrecursionlimit(), args.recursion_limit))
    logger.info(f"Evaluating {' '.join(args.term)}")
    try:
        evaluate(term, Verbosity[args.verbosity.upper()], args.max_steps)
    except RecursionError as e:
        log_exception(logger, e)
        logger.error("Try a larger --recursion-limit")
        return 1
    finally:
        log_counters(logging.DEBUG)
    return 0


parser = argparse.ArgumentParser(
    prog="betared",
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "term",
    nargs="*",
    default=["PLUS", "2", "2"],
    help="Library names or Church numerals, applied left to right",
)
parser.add_argument(
    "--verbosity",
    "-v",
    choices=[v.name.lower() for v in Verbosity],
    default="quiet",
    help="How much of the reduction to print",
)
parser.add_argument(
    "--max-steps",
    type=int,
    default=None,
    help="Stop after this many reduction steps, even without a fixpoint",
)
parser.add_argument(
    "--recursion-limit",
    type=int,
    default=10_000,
    help="Python recursion limit, raised to evaluate deeply nested terms",
)
parser.add_argument(
    "--log-level",
    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    default="WARNING",
    help="Logging level",
)
parser.add_argument(
    "--list",
    action="store_true",
    help="List the library terms and exit",
)


def cli() -> None:
    args = parser.parse_args()
    setup_color_logging(level=getattr(logging, args.log_level))
    sys.exit(main(args))


if __name__ == "__main__":
    cli()
