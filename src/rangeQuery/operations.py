"""
Associative combine operations supported by the sparse table.

Every operation here is associative, so the table can merge two adjacent power-of-two
intervals regardless of grouping. MIN, MAX and GCD are also idempotent (``f(a, a) == a``),
which is what allows the O(1) overlapping-interval query. SUM is not, and uses the
logarithmic cascade instead.
"""

import math
from collections.abc import Sequence
from enum import Enum


class Operation(str, Enum):
    """Supported range query operations."""

    MIN = "min"
    MAX = "max"
    SUM = "sum"
    GCD = "gcd"

    @classmethod
    def _missing_(cls, value: object) -> "Operation | None":
        """Accept operation names in any case, e.g. ``"MIN"``."""
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


def combine(operation: Operation, a: int, b: int) -> int:
    """
    Combine two interval values with the given operation.

    GCD works on absolute values, so its result is never negative.

    Raises:
        ValueError: If the operation is not a known :class:`Operation`.
    """
    if operation is Operation.MIN:
        return a if a <= b else b
    if operation is Operation.MAX:
        return a if a >= b else b
    if operation is Operation.SUM:
        return a + b
    if operation is Operation.GCD:
        return math.gcd(a, b)
    raise ValueError(f"Unknown operation: {operation!r}")


def is_idempotent(operation: Operation) -> bool:
    """Check whether overlapping intervals can be combined without double counting."""
    return operation in (Operation.MIN, Operation.MAX, Operation.GCD)


def supports_index_query(operation: Operation) -> bool:
    """Only extremal operations have a position that produced the answer."""
    return operation in (Operation.MIN, Operation.MAX)


def left_wins(operation: Operation, left: int, right: int) -> bool:
    """
    Decide whether the left interval supplies the extremal value.

    Ties go to the left interval, which keeps the leftmost index.

    Raises:
        ValueError: If the operation does not support index tracking.
    """
    if operation is Operation.MIN:
        return left <= right
    if operation is Operation.MAX:
        return left >= right
    raise ValueError(f"Operation {operation.value} has no extremal position")


def fold(operation: Operation, values: Sequence[int]) -> int:
    """
    Combine all values left to right in O(n).

    Reference answer for range queries. GCD starts from 0 so a single element
    yields its absolute value, the same as a table query over one position.
    """
    if not values:
        raise ValueError("Cannot fold an empty sequence")
    if operation is Operation.GCD:
        result = 0
        for value in values:
            result = math.gcd(result, value)
        return result

    result = values[0]
    for value in values[1:]:
        result = combine(operation, result, value)
    return result
