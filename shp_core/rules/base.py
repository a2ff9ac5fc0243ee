"""Rule data structure."""
from dataclasses import dataclass
from typing import Optional, Tuple

POINT = 'point'
LINE = 'line'
OUTER = 'outer'
INNER = 'inner'
EXCLUDE = 'exclude'

# Classes whose rules derive tags from source attributes
MAPPING_CLASSES = (POINT, LINE, OUTER, INNER)
RULE_CLASSES = MAPPING_CLASSES + (EXCLUDE,)


@dataclass(frozen=True)
class Rule:
    """A single mapping directive from a source attribute to an OSM tag.

    Mapping rules (point/line/outer/inner) match a source attribute by name
    and optionally by value. Exclusion rules match a tag that was already
    derived on a primitive and back ``RuleSet.includes``.

    ``target_key`` and ``target_value`` are stored XML-escaped. A
    ``target_value`` of None passes the (escaped) source value through.
    """
    rule_class: str
    source_key: str
    source_value: Optional[str] = None
    target_key: Optional[str] = None
    target_value: Optional[str] = None

    @property
    def is_pass_through(self) -> bool:
        return self.target_value is None

    def create_tag(self, key: str, value: str) -> Optional[Tuple[str, str]]:
        """Derive a tag from an attribute if this rule matches it.

        Args:
            key: Source attribute name
            value: Normalized, XML-escaped attribute value

        Returns:
            (target key, target value) tuple, or None if no match
        """
        if key != self.source_key:
            return None
        if self.source_value is not None and self.source_value != value:
            return None
        if self.target_value is None:
            return (self.target_key, value)
        return (self.target_key, self.target_value)

    def matches_tag(self, key: str, value: str) -> bool:
        """Check if an existing tag matches this rule's source side."""
        if key != self.source_key:
            return False
        return self.source_value is None or self.source_value == value

    def __str__(self) -> str:
        """String representation for diagnostics."""
        source = f"{self.source_key}={self.source_value or '*'}"
        if self.rule_class == EXCLUDE:
            return f"{self.rule_class}:{source}"
        target = '<source value>' if self.target_value is None else self.target_value
        return f"{self.rule_class}:{source} -> {self.target_key}={target}"
