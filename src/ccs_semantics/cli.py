"""Parse a one-line CCS program and print the trace of its operational semantics.

CCS as presented in "Models of Computation" by Bruni and Montanari, with
some modifications:

- an output action is written with a leading '!'
- recursion is written '_rec x.P' with a lowercase name x
- actions are single letters (latin or greek)

C-style comment lines (//) in the source are skipped.

example input:
    (α.nil + β.nil) | (!α.nil + γ.nil)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ccs_semantics.algebra import Tracer, UnsupportedConstructError, render_tree
from ccs_semantics.parser import ParseError, parse

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ccs-trace",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", type=Path, help="Path to the CCS source")
    parser.add_argument(
        "-v",
        "--verbosity",
        type=str.lower,
        choices=sorted(VERBOSITY_LEVELS),
        default="warning",
        help="How verbose the log output should be (default: warning)",
    )
    parser.add_argument(
        "-p",
        "--print-tree",
        action="store_true",
        help="Print the syntax tree of the input",
    )
    parser.add_argument(
        "-H",
        "--hide-trace",
        action="store_true",
        help="Do not generate the trace",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=VERBOSITY_LEVELS[args.verbosity],
        format="%(levelname)s [%(name)s] %(message)s",
    )

    try:
        source = args.input.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not open {args.input}: {e}")
        return 1

    try:
        term = parse(source)
    except ParseError as e:
        logger.error(str(e))
        return 1

    if args.print_tree:
        print(f"syntax tree:\n{render_tree(term)}")

    if not args.hide_trace:
        try:
            Tracer().run(term)
        except UnsupportedConstructError as e:
            logger.error(str(e))
            return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
