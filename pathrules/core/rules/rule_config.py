"""
Rule configuration management.

Loads validators from YAML files and provides a builder for assembling
them programmatically.
"""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from pathrules.core.models import ComparisonTarget
from pathrules.core.strategies import ConfigurationError, CustomPredicate, OnInvalid

from .rule import Rule
from .rule_set import RuleSet
from .validator import Validator


class RuleConfigLoader:
    """
    Loads a Validator from a YAML configuration file.

    Expected YAML format:
    ```yaml
    name: order checks
    rule_sets:
      - name: lines
        skip_on_error: false
        rules:
          - name: sku format
            field_path: Order.lines
            field_name: sku
            pattern: "^SKU-[0-9]+$"

          - name: totals match invoice
            field_path: Order
            field_name: totals
            comparisons:
              - field_path: Invoice
                field_name: amounts

          - name: has customer
            custom: has_customer
    ```

    Custom rules name a predicate registered in `custom_validators`.
    Invalid-field callbacks cannot be expressed in YAML; pass `on_invalid`
    to apply one callback to every loaded rule set.
    """

    def __init__(
        self,
        config_path: str | Path,
        custom_validators: Mapping[str, CustomPredicate] | None = None,
        on_invalid: OnInvalid | None = None,
    ):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
            custom_validators: Predicates available to `custom:` rules, by name
            on_invalid: Callback attached to every loaded rule set
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")
        self.custom_validators = dict(custom_validators or {})
        self.on_invalid = on_invalid

    def load_validator(self) -> Validator:
        """
        Load and parse the whole configuration.

        Returns:
            Validator described by the file

        Raises:
            ConfigurationError: If YAML is invalid or missing required sections
        """
        config = self._read()
        return Validator(name=str(config.get("name", self.config_path.stem)), rule_sets=self._parse_rule_sets(config))

    def load_rule_sets(self) -> list[RuleSet]:
        """
        Load only the rule sets of the configuration.

        Returns:
            List of RuleSet objects in declared order
        """
        return self._parse_rule_sets(self._read())

    def _read(self) -> dict[str, Any]:
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(config, dict) or "rule_sets" not in config:
            raise ConfigurationError("Configuration file must contain 'rule_sets' section")
        return config

    def _parse_rule_sets(self, config: dict[str, Any]) -> list[RuleSet]:
        rule_set_defs = config["rule_sets"]
        if not isinstance(rule_set_defs, list):
            raise ConfigurationError("'rule_sets' must be a list")

        return [self._parse_rule_set(rule_set_def, idx) for idx, rule_set_def in enumerate(rule_set_defs)]

    def _parse_rule_set(self, rule_set_def: Any, idx: int) -> RuleSet:
        """
        Parse a single rule set definition.

        Args:
            rule_set_def: The rule set definition from YAML
            idx: Index of this rule set (for naming)

        Returns:
            Parsed RuleSet
        """
        if not isinstance(rule_set_def, dict) or "rules" not in rule_set_def:
            raise ConfigurationError(f"Rule set {idx} is missing 'rules'")

        rule_set_name = str(rule_set_def.get("name", f"rule_set_{idx}"))
        rule_defs = rule_set_def["rules"]
        if not isinstance(rule_defs, list):
            raise ConfigurationError(f"Rules for rule set '{rule_set_name}' must be a list")

        rules = [self._parse_rule(rule_set_name, rule_def, rule_idx) for rule_idx, rule_def in enumerate(rule_defs)]

        return RuleSet(
            name=rule_set_name,
            rules=rules,
            skip_on_error=bool(rule_set_def.get("skip_on_error", False)),
            on_invalid=self.on_invalid,
        )

    def _parse_rule(self, rule_set_name: str, rule_def: Any, idx: int) -> Rule:
        """
        Parse a single rule definition.

        Args:
            rule_set_name: Name of the owning rule set
            rule_def: The rule definition from YAML
            idx: Index of this rule within the set (for naming)

        Returns:
            Parsed Rule

        Raises:
            ConfigurationError: If the rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ConfigurationError(f"Rule {idx} of rule set '{rule_set_name}' must be a mapping")

        rule_name = str(rule_def.get("name", f"{rule_set_name}_rule_{idx}"))

        custom_validator = None
        custom_name = rule_def.get("custom")
        if custom_name is not None:
            if custom_name not in self.custom_validators:
                raise ConfigurationError(f"Unknown custom validator '{custom_name}'", rule_name=rule_name)
            custom_validator = self.custom_validators[custom_name]

        comparisons = rule_def.get("comparisons")
        if comparisons is not None and not isinstance(comparisons, list):
            raise ConfigurationError("'comparisons' must be a list", rule_name=rule_name)

        try:
            return Rule(
                name=rule_name,
                field_path=rule_def.get("field_path", ""),
                field_name=rule_def.get("field_name", ""),
                array_index=rule_def.get("array_index"),
                validation_expression=rule_def.get("pattern"),
                field_comparison_list=[ComparisonTarget(**comparison) for comparison in comparisons]
                if comparisons is not None
                else None,
                custom_validator=custom_validator,
            )
        except (PydanticValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid rule definition: {e}", rule_name=rule_name) from e


class RuleConfigBuilder:
    """
    Programmatically build validators (for testing or dynamic rules).

    Rules are added to the most recently opened rule set; a first rule set is
    opened implicitly.
    """

    def __init__(self):
        """Initialize empty configuration."""
        self._rule_sets: list[dict[str, Any]] = []

    def rule_set(
        self,
        name: str = "",
        skip_on_error: bool = False,
        on_invalid: OnInvalid | None = None,
    ) -> "RuleConfigBuilder":
        """Open a new rule set."""
        self._rule_sets.append({
            "name": name or f"rule_set_{len(self._rule_sets)}",
            "skip_on_error": skip_on_error,
            "on_invalid": on_invalid,
            "rules": [],
        })
        return self

    def add_pattern(
        self,
        name: str,
        field_path: str,
        field_name: str,
        pattern: str,
        array_index: int | None = None,
    ) -> "RuleConfigBuilder":
        """Add a pattern rule."""
        return self._add(Rule(
            name=name,
            field_path=field_path,
            field_name=field_name,
            array_index=array_index,
            validation_expression=pattern,
        ))

    def add_comparison(
        self,
        name: str,
        field_path: str,
        field_name: str,
        targets: list[tuple[str, str] | tuple[str, str, int | None]],
        array_index: int | None = None,
    ) -> "RuleConfigBuilder":
        """Add a comparison rule; targets are (field_path, field_name[, array_index]) tuples."""
        return self._add(Rule(
            name=name,
            field_path=field_path,
            field_name=field_name,
            array_index=array_index,
            field_comparison_list=[
                ComparisonTarget(field_path=target[0], field_name=target[1], array_index=(target[2:] or (None,))[0])
                for target in targets
            ],
        ))

    def add_custom(self, name: str, predicate: Callable[[tuple[Any, ...]], bool]) -> "RuleConfigBuilder":
        """Add a custom predicate rule."""
        return self._add(Rule(name=name, custom_validator=predicate))

    def build(self, name: str = "") -> Validator:
        """Build and return the validator."""
        return Validator(
            name=name,
            rule_sets=[RuleSet(**rule_set) for rule_set in self._rule_sets],
        )

    def _add(self, rule: Rule) -> "RuleConfigBuilder":
        if not self._rule_sets:
            self.rule_set()
        self._rule_sets[-1]["rules"].append(rule)
        return self
