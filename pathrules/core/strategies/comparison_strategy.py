"""
ComparisonStrategy - validates that fields hold the same values as other fields.
"""

from collections.abc import Sequence

from pathrules.core.models import ComparisonTarget
from pathrules.observability.logger import get_logger

from .base_strategy import BaseStrategy, ConfigurationError

logger = get_logger(__name__)


def _string_value(field) -> str:
    return field.value


class ComparisonStrategy(BaseStrategy):
    """
    Compares the rule's own values with those of one or more target fields.

    For every target, in declared order, the source and target values must
    form the same multiset of strings: order is irrelevant, duplicates count.

    - source resolves empty: the rule fails
    - a target resolves empty: the rule fails
    - sizes differ: every source field, then every target field, is reported
      invalid and the rule fails
    - sizes equal: both sides are sorted by value and compared position by
      position; the first mismatching pair (source, then target) is reported
      invalid and the rule fails

    Evaluation stops at the first failing target.
    """

    def __init__(self, targets: Sequence[ComparisonTarget]):
        if not targets:
            raise ConfigurationError("comparison list must contain at least one target")
        self.targets = list(targets)

    def evaluate(self, rule, roots, resolver, on_invalid=None) -> bool:
        sources = resolver.resolve(roots, rule.full_path, rule.array_index)
        if not sources:
            return False

        for target in self.targets:
            compared = resolver.resolve(roots, target.full_path, target.array_index)

            if not compared:
                logger.debug(
                    f"Comparison target {target.full_path} resolved no values",
                    extra={"rule_name": rule.name, "path": target.full_path},
                )
                return False

            if len(sources) != len(compared):
                logger.debug(
                    f"Size mismatch comparing {rule.full_path} ({len(sources)}) "
                    f"with {target.full_path} ({len(compared)})",
                    extra={"rule_name": rule.name, "path": target.full_path},
                )
                if on_invalid is not None:
                    for field in sources:
                        on_invalid(field)
                    for field in compared:
                        on_invalid(field)
                return False

            ordered_sources = sorted(sources, key=_string_value)
            ordered_compared = sorted(compared, key=_string_value)
            for source, other in zip(ordered_sources, ordered_compared):
                if source.value != other.value:
                    logger.debug(
                        f"Value {source.value!r} differs from {other.value!r}",
                        extra={"rule_name": rule.name, "path": target.full_path},
                    )
                    if on_invalid is not None:
                        on_invalid(source)
                        on_invalid(other)
                    return False

        return True

    @property
    def kind(self) -> str:
        return "comparison"

    def __repr__(self) -> str:
        return f"ComparisonStrategy(targets={[t.full_path for t in self.targets]})"
