"""
Rules, rule sets, validators and their configuration management.
"""

from .rule import Rule
from .rule_config import RuleConfigBuilder, RuleConfigLoader
from .rule_set import RuleSet
from .validator import Validator

__all__ = [
    "Rule",
    "RuleSet",
    "Validator",
    "RuleConfigLoader",
    "RuleConfigBuilder",
]
