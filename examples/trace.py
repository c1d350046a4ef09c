#!/usr/bin/env python3
"""
Operation tracing example.

This script reduces a library term to a fixpoint while tallying every
substitute, apply and reduce call made by the reducer, then logs the tally
and the final form.
"""

import argparse
import logging
from collections import Counter

from betared import library
from betared.evaluate import parse_words
from betared.logging import setup_color_logging
from betared.reduction import Operation, run_to_fixpoint
from betared.terms import Term, size

logger = logging.getLogger(__name__)
setup_color_logging(level=logging.INFO)


def main(args: argparse.Namespace) -> None:
    term = parse_words(args.term)
    calls: Counter[Operation] = Counter()
    largest = size(term)

    def trace(operation: Operation, inputs: tuple[Term, ...], result: Term) -> None:
        nonlocal largest
        calls[operation] += 1
        largest = max(largest, size(result))

    result = run_to_fixpoint(term, args.max_steps, trace=trace)
    for operation in Operation:
        logger.info(f"{operation.name.lower()}: {calls[operation]} calls")
    logger.info(f"Largest intermediate term: {largest} nodes")
    logger.info(f"Result: {result}")


parser = argparse.ArgumentParser(
    description=__doc__, formatter_class=argparse.ArgumentDefaultsHelpFormatter
)
parser.add_argument(
    "term",
    nargs="*",
    default=["MULT", "2", "3"],
    help=f"Words among {', '.join(library.names())} or numerals",
)
parser.add_argument(
    "--max-steps",
    type=int,
    default=1000,
    help="Number of reduction steps to run before stopping",
)

if __name__ == "__main__":
    args = parser.parse_args()
    main(args)
