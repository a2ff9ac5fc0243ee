"""Rule set and rules file parsing.

Rules files are plain text with one rule per line::

    # class,source key,source value,target key,target value
    outer,LANDUSE,FOREST,landuse,forest
    line,ROADNAME,,name,-
    exclude,highway,proposed,,

Blank source values match any value. A target value of ``-`` (or a blank
one) passes the source value through. Lines that are blank or start with
``#`` are ignored. Malformed lines are skipped and reported as diagnostics
instead of aborting the load.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from shp_core.exceptions import RuleFileError
from shp_core.models.elements import Primitive
from shp_core.rules.base import (
    Rule, RULE_CLASSES, MAPPING_CLASSES, POINT, LINE, OUTER, INNER, EXCLUDE
)
from shp_core.utils.xml_utils import xml_escape

PASS_THROUGH = '-'
FIELD_COUNT = 5


@dataclass(frozen=True)
class RuleDiagnostic:
    """A problem found while parsing a rules file."""
    line_number: int
    line: str
    message: str

    def __str__(self) -> str:
        return f'Skipped line {self.line_number}: "{self.line}": {self.message}'


class RuleSet:
    """Ordered rule lists keyed by geometry class, plus the inclusion predicate.

    Built once (append-only) and treated as read-only afterwards.
    """

    def __init__(self):
        self._rules: Dict[str, List[Rule]] = {name: [] for name in RULE_CLASSES}

    def add(self, rule: Rule) -> None:
        """Append a rule to the list of its class.

        Raises:
            ValueError: If the rule class is unknown
        """
        if rule.rule_class not in self._rules:
            raise ValueError(f"Unknown rule class: {rule.rule_class}")
        self._rules[rule.rule_class].append(rule)

    def rules_for(self, rule_class: str) -> List[Rule]:
        return self._rules[rule_class]

    @property
    def point_rules(self) -> List[Rule]:
        return self._rules[POINT]

    @property
    def line_rules(self) -> List[Rule]:
        return self._rules[LINE]

    @property
    def outer_rules(self) -> List[Rule]:
        return self._rules[OUTER]

    @property
    def inner_rules(self) -> List[Rule]:
        return self._rules[INNER]

    @property
    def exclude_rules(self) -> List[Rule]:
        return self._rules[EXCLUDE]

    def includes(self, primitive: Primitive) -> bool:
        """Inclusion predicate.

        A primitive is rejected when any exclusion rule matches one of its
        tags, and accepted otherwise. With no exclusion rules every
        primitive is accepted.
        """
        for rule in self._rules[EXCLUDE]:
            if primitive.tags.matches(rule.matches_tag):
                return False
        return True

    def __iter__(self):
        for name in RULE_CLASSES:
            yield from self._rules[name]

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._rules.values())


def parse_rule_line(line: str) -> Rule:
    """Parse one non-comment rules line.

    Args:
        line: Raw line without its line terminator

    Returns:
        Parsed Rule with escaped source value and target fields

    Raises:
        ValueError: With a human readable reason if the line is malformed
    """
    splits = line.split(',', FIELD_COUNT - 1)
    if len(splits) != FIELD_COUNT:
        raise ValueError(f"Had {len(splits)} pieces and expected {FIELD_COUNT}.")

    rule_class, source_key, source_value, target_key, target_value = splits

    if rule_class not in RULE_CLASSES:
        raise ValueError(f"Unknown type {rule_class}")
    if not source_key:
        raise ValueError("Missing source key")
    if rule_class in MAPPING_CLASSES and not target_key:
        raise ValueError("Missing target key")

    return Rule(
        rule_class=rule_class,
        source_key=source_key,
        source_value=xml_escape(source_value) if source_value else None,
        target_key=xml_escape(target_key) if target_key else None,
        target_value=(None if target_value in ('', PASS_THROUGH)
                      else xml_escape(target_value)),
    )


def parse_rules(lines: Iterable[str]) -> Tuple[RuleSet, List[RuleDiagnostic]]:
    """Build a RuleSet from rules file lines.

    Pure function: nothing is printed, problems come back as diagnostics.

    Args:
        lines: Iterable of text lines (line terminators are stripped)

    Returns:
        Tuple of (RuleSet, list of RuleDiagnostic)
    """
    ruleset = RuleSet()
    diagnostics: List[RuleDiagnostic] = []

    for line_number, raw in enumerate(lines, 1):
        line = raw.rstrip('\r\n')
        trimmed = line.strip()

        # Skip comments and empty lines
        if not trimmed or trimmed.startswith('#'):
            continue

        try:
            rule = parse_rule_line(line)
        except ValueError as e:
            diagnostics.append(RuleDiagnostic(line_number, line, str(e)))
            continue

        ruleset.add(rule)

    return ruleset, diagnostics


def load_rules(path: str, encoding: str = 'utf-8') -> Tuple[RuleSet, List[RuleDiagnostic]]:
    """Read and parse a rules file.

    Args:
        path: Rules file path
        encoding: Text encoding of the file

    Returns:
        Tuple of (RuleSet, list of RuleDiagnostic)

    Raises:
        FileNotFoundError: If the file does not exist
        RuleFileError: If the file is not valid text in ``encoding``
    """
    try:
        with open(path, 'r', encoding=encoding) as f:
            return parse_rules(f)
    except UnicodeDecodeError as e:
        raise RuleFileError(f"Could not decode rules file {path}: {e}") from e
