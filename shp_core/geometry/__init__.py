"""Geometry decomposition into OSM ways and relations."""

from shp_core.geometry.ways import MAX_NODES_IN_WAY, linestring_to_ways, polygon_to_ways
from shp_core.geometry.multipolygon import (
    PolygonAssembly, assemble_polygon, new_multipolygon, OUTER_ROLE, INNER_ROLE
)

__all__ = [
    'MAX_NODES_IN_WAY', 'linestring_to_ways', 'polygon_to_ways',
    'PolygonAssembly', 'assemble_polygon', 'new_multipolygon', 'OUTER_ROLE', 'INNER_ROLE',
]
