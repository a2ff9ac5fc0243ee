"""Multipolygon assembly from polygon rings.

A polygon whose exterior fits in one way and that has no holes stays a
plain closed way. Anything else becomes a ``type=multipolygon`` relation
with ``outer`` and ``inner`` members.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from shp_core.exceptions import GeometryError
from shp_core.geometry.ways import MAX_NODES_IN_WAY, polygon_to_ways
from shp_core.models.elements import NodeArena, Relation, Way

OUTER_ROLE = 'outer'
INNER_ROLE = 'inner'


@dataclass
class PolygonAssembly:
    """Result of decomposing one polygon.

    ``relation`` is None for a simple polygon; ``outer_ways`` then holds the
    single closed way to emit.
    """
    outer_ways: List[Way] = field(default_factory=list)
    inner_ways: List[Way] = field(default_factory=list)
    relation: Optional[Relation] = None

    @property
    def has_holes(self) -> bool:
        return bool(self.inner_ways)


def new_multipolygon() -> Relation:
    """Create an empty relation tagged type=multipolygon."""
    relation = Relation()
    relation.tags.add('type', 'multipolygon')
    return relation


def assemble_polygon(rings: Sequence[Sequence[Sequence[float]]], arena: NodeArena,
                     max_nodes: int = MAX_NODES_IN_WAY) -> PolygonAssembly:
    """Decompose a polygon into ways and, when needed, a multipolygon relation.

    Args:
        rings: Polygon rings; the first is the exterior, the rest are holes
        arena: Node store receiving the new nodes
        max_nodes: Node ceiling per way

    Returns:
        PolygonAssembly with outer ways, inner ways and optional relation

    Raises:
        GeometryError: If there are no rings or a ring is degenerate
    """
    if not rings:
        raise GeometryError("Polygon without an exterior ring.")

    outer_ways = polygon_to_ways(rings[0], arena, max_nodes)

    inner_ways: List[Way] = []
    for inner_ring in rings[1:]:
        inner_ways.extend(polygon_to_ways(inner_ring, arena, max_nodes))

    if not inner_ways and len(outer_ways) == 1:
        return PolygonAssembly(outer_ways=outer_ways)

    relation = new_multipolygon()
    for way in outer_ways:
        relation.add_member(way, OUTER_ROLE)
    for way in inner_ways:
        relation.add_member(way, INNER_ROLE)

    return PolygonAssembly(outer_ways=outer_ways, inner_ways=inner_ways,
                           relation=relation)
