"""Source feature data model."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Geometry type labels understood by the converter
POINT = 'Point'
MULTI_POINT = 'MultiPoint'
MULTI_LINE_STRING = 'MultiLineString'
MULTI_POLYGON = 'MultiPolygon'
NULL = 'Null'


@dataclass
class SourceFeature:
    """A feature read from a vector source, already in WGS84.

    ``parts`` follows GeoJSON nesting for the label's geometry:

    - Point / MultiPoint: list of (x, y) points
    - MultiLineString: list of lines, each a list of (x, y)
    - MultiPolygon: list of polygons, each a list of rings; ring 0 is the
      exterior, the rest are holes

    x is longitude and y is latitude.
    """
    geometry_type: str
    parts: List[Any] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    feature_id: Optional[int] = None
