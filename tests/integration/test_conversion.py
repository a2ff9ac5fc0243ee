"""End-to-end conversion tests: shapefile + rules file to OSM XML."""
import xml.etree.ElementTree as ET

import pytest

from shp_core.api import ShpToOsm
from shp_core.exceptions import ProjectionError


def _tags(element):
    return {t.get('k'): t.get('v') for t in element.findall('tag')}


def _convert(rules_file, shapefile_path, tmp_path, **kwargs):
    output = tmp_path / "out.osm"
    result = ShpToOsm(str(rules_file), **kwargs).convert(str(shapefile_path), str(output))
    return result, ET.parse(str(output)).getroot()


class TestPointConversion:
    """Point shapefile conversion."""

    def test_default_keeps_untagged(self, rules_file, points_shapefile, tmp_path):
        """Default mode should write untagged nodes too."""
        result, root = _convert(rules_file, points_shapefile, tmp_path)

        nodes = root.findall('node')
        assert len(nodes) == 2
        assert _tags(nodes[0]) == {'amenity': 'cafe', 'name': 'Corner Cafe'}
        assert _tags(nodes[1]) == {}
        assert result['metadata']['elements']['nodes'] == 2

    def test_tagged_only(self, rules_file, points_shapefile, tmp_path):
        """Tagged-only mode should drop the untagged node."""
        _, root = _convert(rules_file, points_shapefile, tmp_path, only_tagged=True)

        nodes = root.findall('node')
        assert len(nodes) == 1
        assert nodes[0].get('id') == '-1'

    def test_special_characters_escaped_once(self, rules_file, tmp_path):
        """Test attribute text with markup characters round-trips intact."""
        shapefile = pytest.importorskip("shapefile")
        base = str(tmp_path / "cafes")
        w = shapefile.Writer(base, shapeType=shapefile.POINT)
        w.field('AMENITY', 'C', 20)
        w.field('NAME', 'C', 50)
        w.point(1.0, 2.0)
        w.record('cafe', 'Tom & Jerry\'s <Diner>')
        w.close()

        _, root = _convert(rules_file, base + '.shp', tmp_path, source_crs='EPSG:4326')

        assert _tags(root.find('node'))['name'] == 'Tom & Jerry\'s <Diner>'
        assert '&amp;amp;' not in (tmp_path / "out.osm").read_text(encoding='utf-8')


class TestLineConversion:
    """Polyline shapefile conversion."""

    def test_lines(self, rules_file, lines_shapefile, tmp_path):
        """Line features should become tagged ways, one per part."""
        result, root = _convert(rules_file, lines_shapefile, tmp_path)

        ways = root.findall('way')
        assert len(ways) == 3
        assert _tags(ways[0]) == {
            'highway': 'residential', 'surface': 'paved', 'name': 'Main Street'
        }
        # Both parts of the multi-part line carry the same tags
        assert _tags(ways[1]) == _tags(ways[2]) == {'surface': 'paved'}
        assert len(root.findall('node')) == 7

        conversion = result['metadata']['conversion']
        assert conversion['features_read'] == 2
        assert conversion['features_converted'] == 2

    def test_references_resolve_backwards(self, rules_file, lines_shapefile, tmp_path):
        """Test every nd ref points at a node written earlier."""
        _, root = _convert(rules_file, lines_shapefile, tmp_path)

        seen = set()
        for element in root:
            if element.tag == 'node':
                seen.add(element.get('id'))
            for nd in element.findall('nd'):
                assert nd.get('ref') in seen


class TestPolygonConversion:
    """Polygon shapefile conversion."""

    def test_polygons(self, rules_file, polygons_shapefile, tmp_path):
        """Simple polygons should become ways, holed ones relations."""
        result, root = _convert(rules_file, polygons_shapefile, tmp_path)

        ways = root.findall('way')
        relations = root.findall('relation')
        assert len(ways) == 3
        assert len(relations) == 1
        assert len(root.findall('node')) == 11

        simple = ways[0]
        assert _tags(simple) == {'landuse': 'forest', 'name': 'Small Wood'}
        refs = [nd.get('ref') for nd in simple.findall('nd')]
        assert refs[0] == refs[-1]

        relation = relations[0]
        assert _tags(relation) == {
            'type': 'multipolygon', 'landuse': 'forest', 'name': 'Big Wood'
        }
        by_id = {w.get('id'): w for w in ways}
        roles = {m.get('role'): by_id[m.get('ref')] for m in relation.findall('member')}
        assert _tags(roles['outer']) == {}
        assert _tags(roles['inner']) == {'natural': 'clearing'}

        assert result['metadata']['elements'] == {
            'nodes': 11, 'ways': 3, 'relations': 1, 'total': 15
        }


class TestFailures:
    """Conversion failures."""

    def test_missing_projection(self, rules_file, points_shapefile, tmp_path):
        """A shapefile without .prj should fail before writing."""
        (tmp_path / "points.prj").unlink()
        with pytest.raises(ProjectionError):
            _convert(rules_file, points_shapefile, tmp_path)

    def test_missing_rules_file(self, tmp_path):
        """A missing rules file should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ShpToOsm(str(tmp_path / "missing.txt"))

    def test_metadata(self, rules_file, points_shapefile, tmp_path):
        """Result metadata should describe the run."""
        result, _ = _convert(rules_file, points_shapefile, tmp_path)
        metadata = result['metadata']
        assert metadata['format'] == 'osm_xml'
        assert metadata['rules'] == 8
        assert metadata['rule_diagnostics'] == 0
        assert metadata['conversion']['skipped_types'] == {}
        assert metadata['processing_time_seconds'] >= 0
