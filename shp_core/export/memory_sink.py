"""In-memory sink."""
from typing import Any, Dict, List, Tuple

from shp_core.export.base import BaseSink
from shp_core.models.elements import Node, Primitive, Relation, Way


class CollectingSink(BaseSink):
    """Keep emitted primitives in memory, in emission order.

    Only primitives handed to the sink directly are recorded; relation
    members are reachable through the relation.
    """

    def __init__(self):
        self.emitted: List[Tuple[str, Primitive]] = []

    def get_format_name(self) -> str:
        return 'memory'

    def add_node(self, node: Node) -> None:
        self.emitted.append(('node', node))

    def add_way(self, way: Way) -> None:
        self.emitted.append(('way', way))

    def add_relation(self, relation: Relation) -> None:
        self.emitted.append(('relation', relation))

    @property
    def nodes(self) -> List[Node]:
        return [p for kind, p in self.emitted if kind == 'node']

    @property
    def ways(self) -> List[Way]:
        return [p for kind, p in self.emitted if kind == 'way']

    @property
    def relations(self) -> List[Relation]:
        return [p for kind, p in self.emitted if kind == 'relation']

    def build_metadata(self) -> Dict[str, Any]:
        return {
            'format': self.get_format_name(),
            'elements': {
                'nodes': len(self.nodes),
                'ways': len(self.ways),
                'relations': len(self.relations),
                'total': len(self.emitted),
            }
        }
