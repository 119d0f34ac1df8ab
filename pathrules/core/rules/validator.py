"""
Validator - runs an ordered list of rule sets and aggregates one result.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pathrules.core.models import ValidationResult
from pathrules.core.resolution import PathResolver
from pathrules.observability.logger import get_logger, log_operation

from .rule_set import RuleSet

logger = get_logger(__name__)


class Validator(BaseModel):
    """
    An ordered list of rule sets executed against the same root objects.

    Every rule set runs regardless of earlier failures; short-circuiting only
    happens inside a rule set.

    Attributes:
        name: Human-readable name of the validator
        rule_sets: Rule sets in execution order
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = ""
    rule_sets: list[RuleSet] = Field(default_factory=list)

    def execute(self, *roots: Any, resolver: PathResolver | None = None) -> ValidationResult:
        """
        Execute all rule sets.

        Args:
            *roots: Candidate root objects
            resolver: Path resolver shared by all rules (a default one is created if omitted)

        Returns:
            ValidationResult aggregating every rule set run

        Raises:
            ConfigurationError: If a rule evaluated has no usable strategy
        """
        resolver = resolver or PathResolver()

        with log_operation("Executing validator", logger=logger, validator=self.name):
            rule_set_results = [rule_set.run(*roots, resolver=resolver) for rule_set in self.rule_sets]

        result = ValidationResult(
            name=self.name,
            succeeded=all(rule_set_result.succeeded for rule_set_result in rule_set_results),
            succeeded_rules=[rule for r in rule_set_results for rule in r.succeeded_rules],
            failed_rules=[rule for r in rule_set_results for rule in r.failed_rules],
            not_ran_rules=[rule for r in rule_set_results for rule in r.not_ran_rules],
            rejected_fields=[field for r in rule_set_results for field in r.rejected_fields],
            rule_set_results=rule_set_results,
        )

        logger.info(
            f"Validator '{self.name}' {'succeeded' if result.succeeded else 'failed'}",
            extra={
                "validator": self.name,
                "succeeded": result.succeeded,
                "succeeded_count": len(result.succeeded_rules),
                "failed_count": len(result.failed_rules),
                "not_ran_count": len(result.not_ran_rules),
            },
        )
        return result

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of configured rules.

        Returns:
            Dictionary with rule set count, rule count and counts per strategy kind
        """
        counts: dict[str, int] = {}
        total = 0
        for rule_set in self.rule_sets:
            for rule in rule_set.rules:
                counts[rule.kind] = counts.get(rule.kind, 0) + 1
                total += 1

        return {
            "total_rule_sets": len(self.rule_sets),
            "total_rules": total,
            "rules_by_strategy": counts,
        }
