"""Data models for OSM primitives and source features."""

from shp_core.models.elements import Tags, Node, NodeArena, Way, Member, Relation, Primitive
from shp_core.models.features import SourceFeature

__all__ = ['Tags', 'Node', 'NodeArena', 'Way', 'Member', 'Relation', 'Primitive',
           'SourceFeature']
