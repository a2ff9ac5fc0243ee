"""Pytest fixtures for shp2osm tests."""
import pytest

from shp_core.models.features import SourceFeature
from shp_core.rules.ruleset import parse_rules

# WGS84 projection definition for .prj files
WGS84_PRJ = (
    'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",'
    'SPHEROID["WGS_1984",6378137,298.257223563]],'
    'PRIMEM["Greenwich",0],UNIT["Degree",0.017453292519943295]]'
)

SAMPLE_RULES = """\
# class,source key,source value,target key,target value
point,AMENITY,,amenity,-
point,NAME,,name,-
line,TYPE,residential,highway,residential
line,TYPE,,surface,paved
line,NAME,,name,-
outer,LANDUSE,forest,landuse,forest
outer,NAME,,name,-
inner,LANDUSE,forest,natural,clearing
"""


def write_prj(base_path):
    with open(f"{base_path}.prj", 'w', encoding='utf-8') as prj:
        prj.write(WGS84_PRJ)


@pytest.fixture
def rules_file(tmp_path):
    """Create sample rules file."""
    file = tmp_path / "rules.txt"
    file.write_text(SAMPLE_RULES, encoding='utf-8')
    return file


@pytest.fixture
def sample_ruleset():
    """Parse the sample rules."""
    ruleset, diagnostics = parse_rules(SAMPLE_RULES.splitlines())
    assert diagnostics == []
    return ruleset


@pytest.fixture
def square():
    """Closed clockwise square ring (x, y)."""
    return [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]


@pytest.fixture
def hole():
    """Closed counter-clockwise ring inside the square."""
    return [(3.0, 3.0), (7.0, 3.0), (7.0, 7.0), (3.0, 7.0), (3.0, 3.0)]


@pytest.fixture
def point_feature():
    """Create sample point feature."""
    return SourceFeature(
        geometry_type='Point',
        parts=[(-0.1, 51.5)],
        attributes={'AMENITY': 'cafe', 'NAME': 'Tom & Jerry', 'SEATS': 12.0},
        feature_id=0,
    )


@pytest.fixture
def points_shapefile(tmp_path):
    """Create point shapefile with a WGS84 .prj."""
    shapefile = pytest.importorskip("shapefile")
    base = str(tmp_path / "points")
    w = shapefile.Writer(base, shapeType=shapefile.POINT)
    w.field('AMENITY', 'C', 20)
    w.field('NAME', 'C', 50)
    w.point(-0.1, 51.5)
    w.record('cafe', 'Corner Cafe')
    w.point(-0.2, 51.6)
    w.record('', '')
    w.close()
    write_prj(base)
    return tmp_path / "points.shp"


@pytest.fixture
def lines_shapefile(tmp_path):
    """Create polyline shapefile with a WGS84 .prj."""
    shapefile = pytest.importorskip("shapefile")
    base = str(tmp_path / "lines")
    w = shapefile.Writer(base, shapeType=shapefile.POLYLINE)
    w.field('TYPE', 'C', 20)
    w.field('NAME', 'C', 50)
    w.field('LANES', 'N', 10, 2)
    w.line([[(0.0, 0.0), (1.0, 1.0), (2.0, 1.0)]])
    w.record('residential', 'Main Street', 2.0)
    w.line([[(5.0, 5.0), (6.0, 6.0)], [(7.0, 7.0), (8.0, 8.0)]])
    w.record('track', '', 1.5)
    w.close()
    write_prj(base)
    return tmp_path / "lines.shp"


@pytest.fixture
def polygons_shapefile(tmp_path, square, hole):
    """Create polygon shapefile: one simple polygon, one with a hole."""
    shapefile = pytest.importorskip("shapefile")
    base = str(tmp_path / "polygons")
    w = shapefile.Writer(base, shapeType=shapefile.POLYGON)
    w.field('LANDUSE', 'C', 20)
    w.field('NAME', 'C', 50)
    w.poly([[(20.0, 20.0), (20.0, 21.0), (21.0, 21.0), (20.0, 20.0)]])
    w.record('forest', 'Small Wood')
    w.poly([square, hole])
    w.record('forest', 'Big Wood')
    w.close()
    write_prj(base)
    return tmp_path / "polygons.shp"
