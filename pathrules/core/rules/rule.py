"""
Rule - one validation unit over a dotted field path.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pathrules.core.models import ComparisonTarget
from pathrules.core.resolution import PathResolver
from pathrules.core.strategies import (
    BaseStrategy,
    ComparisonStrategy,
    ConfigurationError,
    CustomPredicate,
    CustomStrategy,
    OnInvalid,
    PatternStrategy,
)
from pathrules.observability.logger import get_logger

logger = get_logger(__name__)


class Rule(BaseModel):
    """
    A single validation unit.

    A rule points at ``field_path.field_name`` (optionally one element of a
    sequence through ``array_index``) and checks it with exactly one
    strategy. When several are configured the highest precedence wins:
    custom validator, then validation expression, then comparison list.
    A rule with none of them can be built but raises ConfigurationError
    when validated.

    Attributes:
        name: Human-readable name ("order lines have a SKU")
        field_path: Dotted path of the owning object, first segment is the anchor label
        field_name: Field to validate on that object
        array_index: Element index for sequence-valued fields
        validation_expression: Regular expression every value must fully match,
            as a string or a compiled pattern carrying its own flags
        field_comparison_list: Fields that must hold the same values
        custom_validator: Predicate over the raw root objects
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    field_path: str = ""
    field_name: str = ""
    array_index: int | None = Field(None, ge=0)
    validation_expression: str | re.Pattern | None = None
    field_comparison_list: tuple[ComparisonTarget, ...] | None = None
    custom_validator: CustomPredicate | None = None

    @property
    def full_path(self) -> str:
        return f"{self.field_path}.{self.field_name}"

    @property
    def strategy(self) -> BaseStrategy:
        """
        The active strategy of this rule.

        Raises:
            ConfigurationError: If no strategy is configured or the configured one is invalid
        """
        try:
            if self.custom_validator is not None:
                return CustomStrategy(self.custom_validator)
            if self.validation_expression:
                return PatternStrategy(self.validation_expression)
            if self.field_comparison_list:
                return ComparisonStrategy(self.field_comparison_list)
        except ConfigurationError as e:
            raise ConfigurationError(e.message, rule_name=self.name) from e

        raise ConfigurationError(
            "rule needs a custom validator, a validation expression or a field comparison list",
            rule_name=self.name,
        )

    @property
    def kind(self) -> str:
        try:
            return self.strategy.kind
        except ConfigurationError:
            return "unconfigured"

    def validate(
        self,
        *roots: Any,
        on_invalid: OnInvalid | None = None,
        resolver: PathResolver | None = None,
    ) -> bool:
        """
        Validate this rule against the given root objects.

        Args:
            *roots: Candidate root objects
            on_invalid: Called with every field found to be invalid
            resolver: Path resolver to use (a default one is created if omitted)

        Returns:
            True if the rule holds

        Raises:
            ConfigurationError: If the rule has no usable strategy
        """
        strategy = self.strategy
        passed = strategy.evaluate(self, roots, resolver or PathResolver(), on_invalid)

        logger.debug(
            f"Rule '{self.name}' {'passed' if passed else 'failed'}",
            extra={"rule_name": self.name, "strategy": strategy.kind, "passed": passed},
        )
        return passed

    def __str__(self) -> str:
        return f"Rule({self.name})"
