"""OSM XML output sink."""
from typing import Any, Dict, Optional, Tuple

from shp_core.export.base import BaseSink
from shp_core.models.elements import Node, NodeArena, Primitive, Relation, Tags, Way
from shp_core.utils.xml_utils import xml_escape


class OSMXMLWriter(BaseSink):
    """Stream primitives to an OSM XML 0.6 file.

    New elements get negative placeholder IDs from one shared counter, the
    convention editors use for objects not yet uploaded. Referenced nodes
    are written before their way and member ways before their relation,
    so the file never refers forward.

    Node identity is the arena handle: a handle used by two ways of the
    same feature (split junction, ring closure) is written once. Tag keys
    and values are expected to be XML-escaped already.
    """

    def __init__(self, output_file: str, generator: str = 'shp2osm'):
        """Initialize the writer.

        Args:
            output_file: Output file path
            generator: Value of the generator attribute
        """
        self.output_file = output_file
        self.generator = generator
        self.counts = {'nodes': 0, 'ways': 0, 'relations': 0}
        self._file = None
        self._next_id = -1
        self._arena: Optional[NodeArena] = None
        self._node_ids: Dict[int, int] = {}
        self._written: Dict[int, Tuple[Primitive, int]] = {}

    def get_format_name(self) -> str:
        return 'osm'

    def start(self) -> None:
        if self._file is not None:
            return
        self._file = open(self.output_file, 'w', encoding='utf-8')
        self._file.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self._file.write(f'<osm version="0.6" generator="{xml_escape(self.generator)}">\n')

    def finish(self) -> None:
        # Always close the document so partial output stays well-formed
        if self._file is None:
            return
        try:
            self._file.write('</osm>\n')
        finally:
            self._file.close()
            self._file = None

    def add_node(self, node: Node) -> None:
        self._write_node(node)

    def add_way(self, way: Way) -> None:
        self._ensure_written(way)

    def add_relation(self, relation: Relation) -> None:
        self._ensure_written(relation)

    def build_metadata(self) -> Dict[str, Any]:
        return {
            'format': 'osm_xml',
            'output_file': self.output_file,
            'elements': {
                **self.counts,
                'total': sum(self.counts.values()),
            }
        }

    def _new_id(self) -> int:
        osm_id = self._next_id
        self._next_id -= 1
        return osm_id

    def _require_open(self):
        if self._file is None:
            raise ValueError("OSMXMLWriter is not started; use it as a context manager")
        return self._file

    def _use_arena(self, arena: NodeArena) -> None:
        # Handles are only meaningful within one arena (one feature)
        if arena is not self._arena:
            self._arena = arena
            self._node_ids = {}
            self._written = {}

    def _ensure_written(self, primitive: Primitive) -> int:
        """Write a way or relation unless already written; return its ID."""
        if isinstance(primitive, Way):
            self._use_arena(primitive.arena)

        seen = self._written.get(id(primitive))
        if seen is not None:
            return seen[1]

        if isinstance(primitive, Way):
            osm_id = self._write_way(primitive)
        elif isinstance(primitive, Relation):
            osm_id = self._write_relation(primitive)
        else:
            osm_id = self._write_node(primitive)

        self._written[id(primitive)] = (primitive, osm_id)
        return osm_id

    def _write_node(self, node: Node) -> int:
        f = self._require_open()
        osm_id = self._new_id()
        if node.tags:
            f.write(f'  <node id="{osm_id}" lat="{node.lat}" lon="{node.lon}">\n')
            self._write_tags(node.tags)
            f.write('  </node>\n')
        else:
            f.write(f'  <node id="{osm_id}" lat="{node.lat}" lon="{node.lon}"/>\n')
        self.counts['nodes'] += 1
        return osm_id

    def _write_way(self, way: Way) -> int:
        refs = []
        for handle in way.nodes:
            node_id = self._node_ids.get(handle)
            if node_id is None:
                node_id = self._write_node(way.arena[handle])
                self._node_ids[handle] = node_id
            refs.append(node_id)

        f = self._require_open()
        osm_id = self._new_id()
        f.write(f'  <way id="{osm_id}">\n')
        for ref in refs:
            f.write(f'    <nd ref="{ref}"/>\n')
        self._write_tags(way.tags)
        f.write('  </way>\n')
        self.counts['ways'] += 1
        return osm_id

    def _write_relation(self, relation: Relation) -> int:
        refs = [(member.member_type, self._ensure_written(member.primitive), member.role)
                for member in relation.members]

        f = self._require_open()
        osm_id = self._new_id()
        f.write(f'  <relation id="{osm_id}">\n')
        for member_type, ref, role in refs:
            f.write(f'    <member type="{member_type}" ref="{ref}" role="{role}"/>\n')
        self._write_tags(relation.tags)
        f.write('  </relation>\n')
        self.counts['relations'] += 1
        return osm_id

    def _write_tags(self, tags: Tags) -> None:
        f = self._require_open()
        for k, v in tags.items():
            f.write(f'    <tag k="{k}" v="{v}"/>\n')
