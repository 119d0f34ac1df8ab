"""
ComparisonTarget model pointing at the other side of a cross-field comparison.
"""

from pydantic import BaseModel, ConfigDict, Field


class ComparisonTarget(BaseModel):
    """
    The field a comparison rule compares its own values against.

    Attributes:
        field_path: Dotted path of the owning object ("Invoice.lines")
        field_name: Field to compare on that object
        array_index: Optional element index for sequence-valued fields
    """

    model_config = ConfigDict(frozen=True)

    field_path: str = Field(..., min_length=1)
    field_name: str = Field(..., min_length=1)
    array_index: int | None = Field(None, ge=0)

    @property
    def full_path(self) -> str:
        return f"{self.field_path}.{self.field_name}"
