"""
Result models for rule set runs and validator executions (ephemeral).

Results are returned fresh from every run; configuration objects never hold
per-run state, so the same Rule/RuleSet/Validator can be executed repeatedly
or concurrently.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .resolved_field import ResolvedField


class RuleSetResult(BaseModel):
    """
    Outcome of running one RuleSet.

    Attributes:
        succeeded: Overall status of the run
        succeeded_rules: Rules that passed, in evaluation order
        failed_rules: The rule that aborted the run (at most one)
        not_ran_rules: Rules never evaluated because of the failure
        rejected_fields: Fields reported as invalid, in callback order
        skipped: True when the skip-on-error probe fired on the first rule
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    succeeded: bool
    succeeded_rules: list[Any] = Field(default_factory=list)
    failed_rules: list[Any] = Field(default_factory=list)
    not_ran_rules: list[Any] = Field(default_factory=list)
    rejected_fields: list[ResolvedField] = Field(default_factory=list)
    skipped: bool = False

    @model_validator(mode="after")
    def check_succeeded_consistency(self) -> "RuleSetResult":
        """Validate that succeeded=True implies failed_rules is empty."""
        if self.succeeded and self.failed_rules:
            raise ValueError("succeeded=True but failed_rules is not empty")
        return self

    def __bool__(self) -> bool:
        return self.succeeded


class ValidationResult(BaseModel):
    """
    Aggregated outcome of executing a Validator.

    Attributes:
        name: Name of the executed validator
        succeeded: True iff every rule set succeeded
        succeeded_rules: Union of succeeded rules across rule sets
        failed_rules: Union of failed rules across rule sets
        not_ran_rules: Union of never-evaluated rules across rule sets
        rejected_fields: Union of rejected fields across rule sets
        rule_set_results: Per rule set outcomes, in declared order
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = ""
    succeeded: bool
    succeeded_rules: list[Any] = Field(default_factory=list)
    failed_rules: list[Any] = Field(default_factory=list)
    not_ran_rules: list[Any] = Field(default_factory=list)
    rejected_fields: list[ResolvedField] = Field(default_factory=list)
    rule_set_results: list[RuleSetResult] = Field(default_factory=list)

    @property
    def failed_rule_names(self) -> list[str]:
        return [rule.name for rule in self.failed_rules]

    @property
    def succeeded_rule_names(self) -> list[str]:
        return [rule.name for rule in self.succeeded_rules]

    def __bool__(self) -> bool:
        return self.succeeded
