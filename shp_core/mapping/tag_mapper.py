"""Derive OSM tags from source feature attributes."""
from typing import Any, Optional, Sequence

from shp_core.models.elements import Primitive
from shp_core.models.features import SourceFeature
from shp_core.rules.base import Rule
from shp_core.utils.xml_utils import xml_escape


def normalize_value(value: Any) -> Optional[str]:
    """Render a raw attribute value as tag text.

    Booleans render as lowercase true/false and integral floats lose their
    fractional part. Other floats use the default float text. Everything
    else is converted with str() and trimmed.

    Args:
        value: Raw attribute value from the source

    Returns:
        Normalized text, or None for missing and blank values

    Examples:
        >>> normalize_value(4.0)
        '4'
        >>> normalize_value(4.5)
        '4.5'
        >>> normalize_value('  Main St ') is None
        False
        >>> normalize_value('   ') is None
        True
    """
    if value is None:
        return None

    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, float):
        text = str(int(value)) if value.is_integer() else str(value)
    else:
        text = str(value).strip()

    return text or None


def apply_rules(feature: SourceFeature, geometry_type: str,
                primitives: Sequence[Primitive], rules: Sequence[Rule]) -> int:
    """Add tags derived from ``feature`` to every primitive in ``primitives``.

    Every rule is tried against every attribute; a single attribute may
    yield several tags. The attribute named like the geometry type is
    skipped. Existing tags are only ever overwritten by a later tag with
    the same key.

    Args:
        feature: Source feature whose attributes are mapped
        geometry_type: Geometry type label of the feature
        primitives: Primitives receiving the derived tags
        rules: Ordered rule list for the primitives' geometry class

    Returns:
        Number of tags derived (per primitive)
    """
    derived = 0
    for name, raw_value in feature.attributes.items():
        if name == geometry_type:
            continue

        text = normalize_value(raw_value)
        if text is None:
            continue
        escaped = xml_escape(text)

        for rule in rules:
            tag = rule.create_tag(name, escaped)
            if tag is None:
                continue
            derived += 1
            for primitive in primitives:
                primitive.tags.add(*tag)

    return derived
