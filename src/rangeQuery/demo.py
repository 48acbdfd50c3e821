"""
Demonstration entry point: build a table and answer one range query.

Usage:
    range-query-demo                          # min over [2, 7] of the reference array
    range-query-demo 2 -3 4 1 0 -1 -1 5 6 -o max  # max over the whole array
    range-query-demo -o min --index           # also report the leftmost index
"""

import argparse
import logging
import sys

from .config import configure_logging
from .config import get_settings
from .models import QueryResult
from .models import RangeQuery
from .operations import Operation
from .registry import get_table
from .sparse_table import UnsupportedOperationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="range-query-demo",
        description="Answer a static range query with a sparse table.",
    )
    parser.add_argument(
        "values", nargs="*", type=int, help="Integers to index (defaults to the demo array)."
    )
    parser.add_argument(
        "-o",
        "--operation",
        choices=[op.value for op in Operation],
        type=str.lower,
        help="Combine operation.",
    )
    parser.add_argument("-l", "--left", type=int, help="Left index (inclusive).")
    parser.add_argument("-r", "--right", type=int, help="Right index (inclusive).")
    parser.add_argument(
        "--index", action="store_true", help="Also report the leftmost min/max index."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    demo = get_settings().demo

    operation = Operation(args.operation or demo.operation)
    if args.values:
        # Explicit values default to the whole array.
        values = args.values
        left = 0 if args.left is None else args.left
        right = len(values) - 1 if args.right is None else args.right
    else:
        values = list(demo.values)
        left = demo.left if args.left is None else args.left
        right = demo.right if args.right is None else args.right

    try:
        query = RangeQuery(left=left, right=right)
        table = get_table(values, operation)
        result = QueryResult.from_table(table, query, with_index=args.index)
    except (ValueError, UnsupportedOperationError) as exc:
        logger.error("Query failed: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logger.info(
        "%s over [%d, %d] of %d values = %d",
        operation.value,
        left,
        right,
        len(table),
        result.value,
    )
    print(result.model_dump_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
