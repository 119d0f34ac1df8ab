"""
CustomStrategy - validates using a caller-supplied predicate.
"""

from collections.abc import Callable
from typing import Any

from .base_strategy import BaseStrategy, ConfigurationError

CustomPredicate = Callable[[tuple[Any, ...]], bool]


class CustomStrategy(BaseStrategy):
    """
    Validates by calling a predicate on the raw root objects.

    The predicate receives the tuple of roots exactly as passed to the rule
    and its truthiness is the rule's result. Paths are not resolved.
    """

    def __init__(self, predicate: CustomPredicate):
        if not callable(predicate):
            raise ConfigurationError("custom validator must be callable")
        self.predicate = predicate

    def evaluate(self, rule, roots, resolver, on_invalid=None) -> bool:
        return bool(self.predicate(roots))

    @property
    def kind(self) -> str:
        return "custom"

    def __repr__(self) -> str:
        name = getattr(self.predicate, "__name__", repr(self.predicate))
        return f"CustomStrategy(predicate={name})"
