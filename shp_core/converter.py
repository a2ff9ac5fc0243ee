"""Feature to OSM primitive conversion.

The converter pulls one feature at a time from a source and runs it end to
end before reading the next:

1. decompose the geometry into nodes, ways and relations
2. derive tags with the rule list for the geometry class
3. gate every primitive through the inclusion filter
4. push accepted primitives to the sink

Emission is eager. When a feature fails with a GeometryError, everything
emitted for earlier features stays in the sink.
"""
from collections import Counter
from typing import Any, Dict, Iterable, List

from shp_core.exceptions import GeometryError
from shp_core.export.base import BaseSink
from shp_core.geometry.multipolygon import OUTER_ROLE, assemble_polygon
from shp_core.geometry.ways import MAX_NODES_IN_WAY, linestring_to_ways
from shp_core.mapping.tag_mapper import apply_rules
from shp_core.models.elements import Node, NodeArena, Primitive, Way
from shp_core.models.features import (
    SourceFeature, POINT, MULTI_POINT, MULTI_LINE_STRING, MULTI_POLYGON
)
from shp_core.rules.ruleset import RuleSet


class Converter:
    """Convert source features into OSM primitives using a rule set."""

    def __init__(self, ruleset: RuleSet, only_tagged: bool = False,
                 max_nodes: int = MAX_NODES_IN_WAY):
        """Initialize converter.

        Args:
            ruleset: Rules mapping source attributes to tags
            only_tagged: If True, only emit primitives with at least one tag
            max_nodes: Node ceiling per way
        """
        self.ruleset = ruleset
        self.only_tagged = only_tagged
        self.max_nodes = max_nodes
        self.stats: Dict[str, Any] = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            'features_read': 0,
            'features_converted': 0,
            'features_skipped': 0,
            'nodes_emitted': 0,
            'ways_emitted': 0,
            'relations_emitted': 0,
            'tags_derived': 0,
            'skipped_types': Counter(),
        }

    def should_include(self, primitive: Primitive) -> bool:
        """Inclusion filter for one emitted unit."""
        if self.only_tagged:
            return bool(primitive.tags) and self.ruleset.includes(primitive)
        return self.ruleset.includes(primitive)

    def convert(self, features: Iterable[SourceFeature], sink: BaseSink) -> Dict[str, Any]:
        """Convert every feature and push accepted primitives to ``sink``.

        Args:
            features: Feature source, iterated lazily
            sink: Started output sink

        Returns:
            Conversion statistics

        Raises:
            GeometryError: On the first feature that cannot be decomposed
        """
        for feature in features:
            self.convert_feature(feature, sink)
        return self.stats

    def convert_feature(self, feature: SourceFeature, sink: BaseSink) -> None:
        """Convert a single feature."""
        self.stats['features_read'] += 1
        geometry_type = feature.geometry_type

        try:
            if geometry_type in (POINT, MULTI_POINT):
                self._convert_points(feature, sink)
            elif geometry_type == MULTI_LINE_STRING:
                self._convert_lines(feature, sink)
            elif geometry_type == MULTI_POLYGON:
                self._convert_polygons(feature, sink)
            else:
                self.stats['features_skipped'] += 1
                self.stats['skipped_types'][geometry_type] += 1
                return
        except GeometryError as e:
            if e.feature_id is None:
                e.feature_id = feature.feature_id
            raise

        self.stats['features_converted'] += 1

    def _apply(self, feature: SourceFeature, primitives: List[Primitive], rules) -> None:
        self.stats['tags_derived'] += apply_rules(
            feature, feature.geometry_type, primitives, rules
        )

    def _emit(self, primitive: Primitive, sink: BaseSink) -> None:
        if isinstance(primitive, Node):
            sink.add_node(primitive)
            self.stats['nodes_emitted'] += 1
        elif isinstance(primitive, Way):
            sink.add_way(primitive)
            self.stats['ways_emitted'] += 1
        else:
            sink.add_relation(primitive)
            self.stats['relations_emitted'] += 1

    def _convert_points(self, feature: SourceFeature, sink: BaseSink) -> None:
        arena = NodeArena()
        nodes = [arena[arena.add(lat=point[1], lon=point[0])] for point in feature.parts]

        self._apply(feature, nodes, self.ruleset.point_rules)

        for node in nodes:
            if self.should_include(node):
                self._emit(node, sink)

    def _convert_lines(self, feature: SourceFeature, sink: BaseSink) -> None:
        arena = NodeArena()
        for line in feature.parts:
            ways = linestring_to_ways(line, arena, self.max_nodes)
            self._apply(feature, ways, self.ruleset.line_rules)
            for way in ways:
                if self.should_include(way):
                    self._emit(way, sink)

    def _convert_polygons(self, feature: SourceFeature, sink: BaseSink) -> None:
        arena = NodeArena()
        for rings in feature.parts:
            assembly = assemble_polygon(rings, arena, self.max_nodes)
            relation = assembly.relation

            if relation is None:
                # Simple polygon: the closed outer way carries the tags
                self._apply(feature, assembly.outer_ways, self.ruleset.outer_rules)
                for way in assembly.outer_ways:
                    if self.should_include(way):
                        self._emit(way, sink)

            elif assembly.has_holes:
                # Tags go on the relation; every outer way stays a member
                self._apply(feature, [relation], self.ruleset.outer_rules)
                self._apply(feature, assembly.inner_ways, self.ruleset.inner_rules)
                if self.should_include(relation):
                    self._emit(relation, sink)

            else:
                # Split exterior without holes: tags go on the outer ways
                self._apply(feature, assembly.outer_ways, self.ruleset.outer_rules)
                relation.members = [
                    m for m in relation.members
                    if m.role != OUTER_ROLE or self.should_include(m.primitive)
                ]
                if self.should_include(relation):
                    self._emit(relation, sink)
