"""
PatternStrategy - validates resolved field values against a regular expression.
"""

import re
from re import Pattern

from pathrules.observability.logger import get_logger

from .base_strategy import BaseStrategy, ConfigurationError

logger = get_logger(__name__)


class PatternStrategy(BaseStrategy):
    """
    Validates that every resolved value fully matches a regular expression.

    Values are matched on their string rendering, in resolution order. The
    first value that does not match is reported to the invalid callback and
    fails the rule. A path resolving to no values fails the rule.
    """

    def __init__(self, expression: str | Pattern):
        try:
            if isinstance(expression, str):
                self.pattern: Pattern = re.compile(expression)
            elif isinstance(expression, Pattern):
                self.pattern = expression
            else:
                raise ConfigurationError(
                    f"Pattern must be string or compiled Pattern, got {type(expression)}"
                )
        except re.error as e:
            raise ConfigurationError(f"Invalid regex pattern: {e}")

    def evaluate(self, rule, roots, resolver, on_invalid=None) -> bool:
        fields = resolver.resolve(roots, rule.full_path, rule.array_index)
        if not fields:
            return False

        for field in fields:
            if self.pattern.fullmatch(field.value) is None:
                logger.debug(
                    f"Value {field.value!r} does not match pattern {self.pattern.pattern!r}",
                    extra={"rule_name": rule.name, "path": field.path, "array_index": field.index},
                )
                if on_invalid is not None:
                    on_invalid(field)
                return False

        return True

    @property
    def kind(self) -> str:
        return "pattern"

    def __repr__(self) -> str:
        return f"PatternStrategy(pattern={self.pattern.pattern!r})"
