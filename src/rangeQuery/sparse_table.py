"""
Sparse table implementation for static range min/max/sum/gcd queries.

This module provides a precomputed table of combined values over every power-of-two
interval of a fixed integer array. After an O(n log n) build, idempotent operations
(min, max, gcd) are answered in O(1) and sums in O(log n). Min/max tables also track
which position produced each value, so the leftmost extremal index can be queried.
"""

import logging
import operator
from collections.abc import Iterable
from dataclasses import dataclass

from .operations import Operation
from .operations import combine
from .operations import is_idempotent
from .operations import left_wins
from .operations import supports_index_query

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UnsupportedOperationError(Exception):
    """Raised when an index query is made on a table that cannot answer it."""

    operation: Operation

    def __str__(self) -> str:
        return f"Operation type: {self.operation.value} doesn't support index queries"


class SparseTable:
    """
    Immutable sparse table over a static integer array.

    The table is stored in flat, row-major tuples:
    - ``table[p * n + i]`` holds the combined value over ``[i, i + 2**p)``
    - ``index[p * n + i]`` (min/max only) holds the position that produced it
    - Cells with ``i + 2**p > n`` are never populated and never read

    Nothing is mutated after construction, so one instance can be queried from any
    number of threads without locking.

    Complexity:
    - Build: O(n log n)
    - Query: O(1) for min/max/gcd, O(log n) for sum
    - Space: O(n log n)

    Sums use Python integers and are never checked for overflow; callers handing results
    to fixed-width consumers must range-check them.
    """

    def __init__(self, values: Iterable[int], operation: Operation | str):
        """
        Build the table in O(n log n) time.

        Args:
            values: Integers to index (copied; the caller's sequence is not referenced)
            operation: Operation applied by every query

        Raises:
            ValueError: If ``values`` is empty or the operation name is unknown
            TypeError: If a value is not an integer
        """
        self._operation = Operation(operation)
        self._values = tuple(operator.index(value) for value in values)
        self._n = len(self._values)

        if self._n == 0:
            raise ValueError("Cannot build a sparse table from an empty array")

        self._log2 = self._build_log_table(self._n)
        self._levels = self._log2[self._n]

        table, index = self._build()
        self._table: tuple[int, ...] = tuple(table)
        self._index: tuple[int, ...] | None = tuple(index) if index is not None else None

        logger.debug(
            "Built %s sparse table: n=%d levels=%d",
            self._operation.value,
            self._n,
            self._levels + 1,
        )

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"SparseTable(operation={self._operation.value!r}, n={self._n})"

    @property
    def operation(self) -> Operation:
        """Operation this table was built for."""
        return self._operation

    @property
    def values(self) -> tuple[int, ...]:
        """Copy of the input array."""
        return self._values

    @property
    def levels(self) -> int:
        """Highest populated level, ``floor(log2(n))``."""
        return self._levels

    def log2(self, length: int) -> int:
        """
        Look up ``floor(log2(length))`` for ``1 <= length <= n``.

        Raises:
            ValueError: If length is outside the lookup table
        """
        if length < 1 or length > self._n:
            raise ValueError(f"Length {length} outside lookup range [1, {self._n}]")
        return self._log2[length]

    def value_at(self, level: int, start: int) -> int:
        """
        Return the precomputed value over ``[start, start + 2**level)``.

        Raises:
            ValueError: If the cell is not populated
        """
        self._validate_cell(level, start)
        return self._table[level * self._n + start]

    def index_at(self, level: int, start: int) -> int:
        """
        Return the position that produced ``value_at(level, start)``.

        Raises:
            UnsupportedOperationError: If the table is not a min/max table
            ValueError: If the cell is not populated
        """
        if self._index is None:
            raise UnsupportedOperationError(self._operation)
        self._validate_cell(level, start)
        return self._index[level * self._n + start]

    def query(self, left: int, right: int) -> int:
        """
        Combine the values over ``[left, right]`` (both inclusive).

        Args:
            left: Left index (inclusive)
            right: Right index (inclusive)

        Returns:
            The min, max, gcd or sum over the range

        Raises:
            ValueError: If indices are out of bounds or invalid
        """
        self._validate_range(left, right)
        if not is_idempotent(self._operation):
            return self._cascading_query(left, right)

        level = self._log2[right - left + 1]
        row = level * self._n
        # Two blocks of length 2**level covering the range; they may overlap.
        return combine(
            self._operation,
            self._table[row + left],
            self._table[row + right - (1 << level) + 1],
        )

    def query_index(self, left: int, right: int) -> int:
        """
        Find the leftmost index holding the min/max over ``[left, right]``.

        Args:
            left: Left index (inclusive)
            right: Right index (inclusive)

        Returns:
            Position ``j`` in ``[left, right]`` with ``values[j] == query(left, right)``

        Raises:
            UnsupportedOperationError: If the table is a sum or gcd table
            ValueError: If indices are out of bounds or invalid
        """
        if not supports_index_query(self._operation):
            raise UnsupportedOperationError(self._operation)
        self._validate_range(left, right)

        level = self._log2[right - left + 1]
        row = level * self._n
        left_cell = row + left
        right_cell = row + right - (1 << level) + 1

        if left_wins(self._operation, self._table[left_cell], self._table[right_cell]):
            return self._index[left_cell]
        return self._index[right_cell]

    def _cascading_query(self, left: int, right: int) -> int:
        """
        Sum over ``[left, right]`` in O(log n).

        Greedily takes the largest power-of-two block that still fits, so the range is
        split into disjoint blocks following the binary representation of its length.
        """
        total = 0
        for level in range(self._levels, -1, -1):
            size = 1 << level
            if size <= right - left + 1:
                total += self._table[level * self._n + left]
                left += size
        return total

    def _build(self) -> tuple[list[int], list[int] | None]:
        """
        Fill every populated cell from the two half-intervals one level below.

        Returns:
            (value table, index table or None for sum/gcd)
        """
        n = self._n
        op = self._operation
        size = (self._levels + 1) * n

        table = [0] * size
        table[:n] = self._values

        index = None
        if supports_index_query(op):
            index = [0] * size
            index[:n] = range(n)

        for level in range(1, self._levels + 1):
            half = 1 << (level - 1)
            row = level * n
            prev = row - n
            for i in range(n - (1 << level) + 1):
                left = table[prev + i]
                right = table[prev + i + half]
                table[row + i] = combine(op, left, right)
                if index is not None:
                    # Ties keep the left child's position.
                    if left_wins(op, left, right):
                        index[row + i] = index[prev + i]
                    else:
                        index[row + i] = index[prev + i + half]

        return table, index

    @staticmethod
    def _build_log_table(n: int) -> tuple[int, ...]:
        """Build ``log2[k] = floor(log2(k))`` for ``0 <= k <= n``; entry 0 is unused."""
        log2 = [0] * (n + 1)
        for k in range(2, n + 1):
            log2[k] = log2[k // 2] + 1
        return tuple(log2)

    def _validate_range(self, left: int, right: int) -> None:
        """
        Validate query range indices.

        Raises:
            ValueError: If indices are invalid
        """
        if left < 0 or right >= self._n or left > right:
            raise ValueError(f"Invalid range [{left}, {right}] for table size {self._n}")

    def _validate_cell(self, level: int, start: int) -> None:
        if level < 0 or level > self._levels or start < 0 or start + (1 << level) > self._n:
            raise ValueError(
                f"Cell (level={level}, start={start}) is not populated for table size {self._n}"
            )


def construct(values: Iterable[int], operation: Operation | str) -> SparseTable:
    """Build a :class:`SparseTable` for ``operation`` over ``values``."""
    return SparseTable(values, operation)
