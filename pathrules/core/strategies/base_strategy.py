"""
Base strategy interface for all rule strategies.

A Rule owns exactly one strategy. All strategies inherit from BaseStrategy
and implement the evaluate() method.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pathrules.core.models import ResolvedField
from pathrules.core.resolution import PathResolver

if TYPE_CHECKING:
    from pathrules.core.rules.rule import Rule

OnInvalid = Callable[[ResolvedField], None]


class ConfigurationError(ValueError):
    """Raised when a rule or rule configuration cannot be evaluated as configured."""

    def __init__(self, message: str, rule_name: str | None = None):
        self.rule_name = rule_name
        self.message = message
        super().__init__(f"[{rule_name}] {message}" if rule_name else message)


class BaseStrategy(ABC):
    """
    Abstract base class for rule strategies.

    Each strategy implements one validation behavior
    (pattern, comparison, custom).
    """

    @abstractmethod
    def evaluate(
        self,
        rule: "Rule",
        roots: tuple[Any, ...],
        resolver: PathResolver,
        on_invalid: OnInvalid | None = None,
    ) -> bool:
        """
        Evaluate the rule against the root objects.

        Args:
            rule: The rule being evaluated (supplies path and index)
            roots: Candidate root objects
            resolver: Resolver used to locate field values
            on_invalid: Called with every field found to be invalid

        Returns:
            True if the rule holds
        """
        pass

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the strategy kind identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
