"""
Core data models for the pathrules validation engine.

All models use Pydantic for runtime validation and type safety.
"""

from .comparison_target import ComparisonTarget
from .resolved_field import ResolvedField
from .validation_result import RuleSetResult, ValidationResult

__all__ = [
    "ComparisonTarget",
    "ResolvedField",
    "RuleSetResult",
    "ValidationResult",
]
