"""
RuleSet - an ordered pipeline of rules sharing one invalid callback.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pathrules.core.models import ResolvedField, RuleSetResult
from pathrules.core.resolution import PathResolver
from pathrules.core.strategies import OnInvalid
from pathrules.observability.logger import get_logger

from .rule import Rule

logger = get_logger(__name__)


class RuleSet(BaseModel):
    """
    Runs rules in declared order, stopping at the first failure.

    Rules after the failing one are reported as not run. With
    ``skip_on_error`` set, a failure of the very first rule means the whole
    set does not apply: the run succeeds and no further rules are evaluated.

    Attributes:
        name: Optional label used in logs
        rules: Rules in evaluation order
        skip_on_error: Treat a failing first rule as "set not applicable"
        on_invalid: Called with every field any rule reports as invalid
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = ""
    rules: list[Rule] = Field(default_factory=list)
    skip_on_error: bool = False
    on_invalid: OnInvalid | None = None

    def run(self, *roots: Any, resolver: PathResolver | None = None) -> RuleSetResult:
        """
        Run every rule against the given root objects.

        Args:
            *roots: Candidate root objects
            resolver: Path resolver shared by all rules (a default one is created if omitted)

        Returns:
            RuleSetResult for this run

        Raises:
            ConfigurationError: If a rule evaluated has no usable strategy
        """
        resolver = resolver or PathResolver()
        succeeded_rules: list[Rule] = []
        rejected_fields: list[ResolvedField] = []

        def report(field: ResolvedField) -> None:
            rejected_fields.append(field)
            if self.on_invalid is not None:
                self.on_invalid(field)

        for position, rule in enumerate(self.rules):
            if rule.validate(*roots, on_invalid=report, resolver=resolver):
                succeeded_rules.append(rule)
                continue

            if self.skip_on_error and position == 0:
                logger.debug(
                    f"First rule '{rule.name}' failed, skipping rule set",
                    extra={"rule_set": self.name, "rule_name": rule.name},
                )
                return RuleSetResult(succeeded=True, skipped=True, rejected_fields=rejected_fields)

            not_ran_rules = list(self.rules[position + 1:])
            logger.debug(
                f"Rule '{rule.name}' failed, {len(not_ran_rules)} rule(s) not run",
                extra={"rule_set": self.name, "rule_name": rule.name, "not_ran_count": len(not_ran_rules)},
            )
            return RuleSetResult(
                succeeded=False,
                succeeded_rules=succeeded_rules,
                failed_rules=[rule],
                not_ran_rules=not_ran_rules,
                rejected_fields=rejected_fields,
            )

        return RuleSetResult(
            succeeded=True,
            succeeded_rules=succeeded_rules,
            rejected_fields=rejected_fields,
        )
