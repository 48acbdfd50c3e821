"""Pydantic models for range query requests and results."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_serializer
from pydantic import model_validator

from .operations import Operation
from .sparse_table import SparseTable


class RangeQuery(BaseModel):
    """Closed interval ``[left, right]`` over a table."""

    model_config = ConfigDict(frozen=True)

    left: int = Field(..., ge=0, description="Left index (inclusive)")
    right: int = Field(..., ge=0, description="Right index (inclusive)")

    @model_validator(mode="after")
    def right_not_before_left(self):
        """Validate that the interval is not empty."""
        if self.left > self.right:
            msg = f"Invalid range [{self.left}, {self.right}]: left must be <= right"
            raise ValueError(msg)
        return self

    @property
    def length(self) -> int:
        return self.right - self.left + 1


class QueryResult(BaseModel):
    """Answer to a range query, with the producing index for min/max tables."""

    operation: Operation
    left: int
    right: int
    value: int
    index: int | None = Field(None, description="Leftmost extremal index (min/max only)")

    @field_serializer("operation")
    def serialize_operation(self, operation: Operation) -> str:
        return operation.value

    @classmethod
    def from_table(
        cls, table: SparseTable, query: RangeQuery, with_index: bool = False
    ) -> "QueryResult":
        """
        Run ``query`` against ``table``.

        Raises:
            ValueError: If the range does not fit the table
            UnsupportedOperationError: If ``with_index`` is set on a sum/gcd table
        """
        index = table.query_index(query.left, query.right) if with_index else None
        return cls(
            operation=table.operation,
            left=query.left,
            right=query.right,
            value=table.query(query.left, query.right),
            index=index,
        )
