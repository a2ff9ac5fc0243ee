"""Rule table model and parsing."""

from shp_core.rules.base import Rule, POINT, LINE, OUTER, INNER, EXCLUDE, RULE_CLASSES
from shp_core.rules.ruleset import (
    RuleSet, RuleDiagnostic, parse_rule_line, parse_rules, load_rules
)

__all__ = [
    'Rule', 'POINT', 'LINE', 'OUTER', 'INNER', 'EXCLUDE', 'RULE_CLASSES',
    'RuleSet', 'RuleDiagnostic', 'parse_rule_line', 'parse_rules', 'load_rules',
]
