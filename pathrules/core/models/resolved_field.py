"""
ResolvedField model representing one concrete leaf value found by path resolution (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResolvedField(BaseModel):
    """
    One leaf value located by resolving a dotted path against an object graph.

    Note: comparisons and pattern matches always operate on `value`, the
    string rendering, never on `raw_value`.

    Attributes:
        owner: Object that holds the field
        field_name: Name of the field on the owner
        path: Full dotted label of the field ("Order.lines.sku")
        index: Element index when the field is sequence-valued
        raw_value: Native value as read from the owner
        value: String rendering used for matching
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    owner: Any = Field(repr=False)
    field_name: str
    path: str
    index: int | None = None
    raw_value: Any = Field(default=None, repr=False)
    value: str

    def __str__(self) -> str:
        location = self.path if self.index is None else f"{self.path}[{self.index}]"
        return f"{location}={self.value!r}"
