"""Tests for request/result models defined in rangeQuery.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fixtures.sample_arrays import REFERENCE_VALUES
from rangeQuery.models import QueryResult
from rangeQuery.models import RangeQuery
from rangeQuery.operations import Operation
from rangeQuery.sparse_table import SparseTable
from rangeQuery.sparse_table import UnsupportedOperationError


def test_range_query_valid() -> None:
    query = RangeQuery(left=2, right=7)

    assert query.length == 6


def test_range_query_single_position() -> None:
    assert RangeQuery(left=3, right=3).length == 1


def test_range_query_rejects_negative_indices() -> None:
    with pytest.raises(ValidationError):
        RangeQuery(left=-1, right=2)


def test_range_query_rejects_reversed_bounds() -> None:
    with pytest.raises(ValidationError, match="left must be <= right"):
        RangeQuery(left=5, right=4)


def test_range_query_is_frozen() -> None:
    query = RangeQuery(left=0, right=1)

    with pytest.raises(ValidationError):
        query.left = 1


def test_query_result_from_min_table() -> None:
    table = SparseTable(REFERENCE_VALUES, Operation.MIN)

    result = QueryResult.from_table(table, RangeQuery(left=2, right=7), with_index=True)

    assert result.value == -1
    assert result.index == 5
    assert result.operation is Operation.MIN


def test_query_result_without_index() -> None:
    table = SparseTable(REFERENCE_VALUES, Operation.SUM)

    result = QueryResult.from_table(table, RangeQuery(left=0, right=8))

    assert result.value == 13
    assert result.index is None


def test_query_result_serializes_operation_name() -> None:
    table = SparseTable(REFERENCE_VALUES, Operation.MAX)

    result = QueryResult.from_table(table, RangeQuery(left=0, right=8), with_index=True)

    assert result.model_dump() == {
        "operation": "max",
        "left": 0,
        "right": 8,
        "value": 6,
        "index": 8,
    }


def test_query_result_index_on_gcd_table_rejected() -> None:
    table = SparseTable(REFERENCE_VALUES, Operation.GCD)

    with pytest.raises(UnsupportedOperationError):
        QueryResult.from_table(table, RangeQuery(left=0, right=3), with_index=True)


def test_query_result_range_beyond_table_rejected() -> None:
    table = SparseTable(REFERENCE_VALUES, Operation.MIN)

    with pytest.raises(ValueError, match="Invalid range"):
        QueryResult.from_table(table, RangeQuery(left=0, right=9))
