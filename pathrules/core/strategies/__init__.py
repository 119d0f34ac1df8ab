"""
Rule strategies.

Provides the pattern, comparison and custom predicate behaviors a Rule can use.
"""

from .base_strategy import BaseStrategy, ConfigurationError, OnInvalid
from .comparison_strategy import ComparisonStrategy
from .custom_strategy import CustomPredicate, CustomStrategy
from .pattern_strategy import PatternStrategy

__all__ = [
    "BaseStrategy",
    "ConfigurationError",
    "OnInvalid",
    "PatternStrategy",
    "ComparisonStrategy",
    "CustomStrategy",
    "CustomPredicate",
]
