"""
shp_core - Shapefile to OpenStreetMap conversion engine.

This package converts vector features into OSM nodes, ways and relations,
deriving tags from a rules file that maps source attributes to OSM tags.
"""

__version__ = "1.0.0"

# Data models
from shp_core.models.elements import Tags, Node, NodeArena, Way, Member, Relation
from shp_core.models.features import SourceFeature

# Rules
from shp_core.rules.base import Rule
from shp_core.rules.ruleset import RuleSet, RuleDiagnostic, parse_rules, load_rules

# Conversion
from shp_core.geometry import MAX_NODES_IN_WAY, linestring_to_ways, polygon_to_ways, assemble_polygon
from shp_core.mapping.tag_mapper import apply_rules, normalize_value
from shp_core.converter import Converter

# Output
from shp_core.export import BaseSink, CollectingSink, OSMXMLWriter

# API
from shp_core.api import ShpToOsm

# Errors
from shp_core.exceptions import ShpToOsmError, GeometryError, ProjectionError, RuleFileError

__all__ = [
    # Version
    '__version__',
    # Models
    'Tags', 'Node', 'NodeArena', 'Way', 'Member', 'Relation', 'SourceFeature',
    # Rules
    'Rule', 'RuleSet', 'RuleDiagnostic', 'parse_rules', 'load_rules',
    # Conversion
    'MAX_NODES_IN_WAY', 'linestring_to_ways', 'polygon_to_ways', 'assemble_polygon',
    'apply_rules', 'normalize_value', 'Converter',
    # Output
    'BaseSink', 'CollectingSink', 'OSMXMLWriter',
    # API
    'ShpToOsm',
    # Errors
    'ShpToOsmError', 'GeometryError', 'ProjectionError', 'RuleFileError',
]
