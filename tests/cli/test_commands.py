"""Tests for the convert and rules CLI commands."""
import json
import xml.etree.ElementTree as ET
from argparse import Namespace

import pytest

from shp_core.cli.main import create_parser, main


class TestConvertCommand:
    """Tests for convert command."""

    def test_convert(self, rules_file, points_shapefile, tmp_path, capsys):
        """Test convert writes the file and a summary."""
        output = tmp_path / "out.osm"
        result = main(['convert', str(points_shapefile), str(rules_file), str(output)])
        assert result == 0

        captured = capsys.readouterr()
        assert "Converted 2 of 2 features" in captured.err
        assert "Wrote 2 nodes, 0 ways, 0 relations" in captured.err
        assert len(ET.parse(str(output)).getroot().findall('node')) == 2

    def test_convert_tagged_only(self, rules_file, points_shapefile, tmp_path):
        """Test -t drops untagged primitives."""
        output = tmp_path / "out.osm"
        result = main(['convert', '-t', str(points_shapefile), str(rules_file), str(output)])
        assert result == 0
        assert len(ET.parse(str(output)).getroot().findall('node')) == 1

    def test_convert_quiet(self, rules_file, points_shapefile, tmp_path, capsys):
        """Test -q suppresses the summary."""
        output = tmp_path / "out.osm"
        main(['-q', 'convert', str(points_shapefile), str(rules_file), str(output)])
        assert capsys.readouterr().err == ''

    def test_convert_verbose_lists_rules(self, rules_file, points_shapefile, tmp_path, capsys):
        """Test -v lists every rule."""
        output = tmp_path / "out.osm"
        main(['-v', 'convert', str(points_shapefile), str(rules_file), str(output)])
        assert "Adding rule point:AMENITY=* -> amenity=<source value>" in capsys.readouterr().err

    def test_convert_reports_skipped_lines(self, points_shapefile, tmp_path, capsys):
        """Test malformed rule lines are reported."""
        rules = tmp_path / "rules.txt"
        rules.write_text("point,NAME,,name,-\npoint,NAME\n", encoding='utf-8')
        output = tmp_path / "out.osm"

        result = main(['convert', str(points_shapefile), str(rules), str(output)])
        assert result == 0
        err = capsys.readouterr().err
        assert 'Skipped line 2: "point,NAME": Had 2 pieces and expected 5.' in err

    def test_convert_missing_input(self, rules_file, tmp_path, capsys):
        """Test missing shapefile exit code."""
        output = tmp_path / "out.osm"
        result = main(['convert', str(tmp_path / "none.shp"), str(rules_file), str(output)])
        assert result == 3
        assert "File not found" in capsys.readouterr().err

    def test_convert_missing_projection(self, rules_file, points_shapefile, tmp_path, capsys):
        """Test missing projection exit code."""
        (tmp_path / "points.prj").unlink()
        output = tmp_path / "out.osm"
        result = main(['convert', str(points_shapefile), str(rules_file), str(output)])
        assert result == 2
        assert ".prj file was not included" in capsys.readouterr().err

    def test_convert_source_crs(self, rules_file, points_shapefile, tmp_path):
        """Test --source-crs replaces the .prj."""
        (tmp_path / "points.prj").unlink()
        output = tmp_path / "out.osm"
        result = main(['convert', '--source-crs', 'EPSG:4326', str(points_shapefile),
                       str(rules_file), str(output)])
        assert result == 0

    def test_run_with_namespace(self, rules_file, lines_shapefile, tmp_path):
        """Test run() called directly with parsed arguments."""
        from shp_core.cli.commands import convert

        output = tmp_path / "out.osm"
        args = Namespace(
            input=str(lines_shapefile),
            rules=str(rules_file),
            output=str(output),
            tagged_only=False,
            source_crs=None,
            encoding='utf-8',
            generator='custom',
        )
        assert convert.run(args) == 0
        assert ET.parse(str(output)).getroot().get('generator') == 'custom'


class TestRulesCommand:
    """Tests for rules command."""

    def test_rules_listing(self, rules_file, capsys):
        """Test rules are listed per class."""
        result = main(['rules', str(rules_file)])
        assert result == 0

        out = capsys.readouterr().out
        assert "point (2)" in out
        assert "line (3)" in out
        assert "  line:TYPE=residential -> highway=residential" in out
        assert "Total: 8 rules, 0 skipped lines" in out

    def test_rules_json(self, rules_file, capsys):
        """Test rules JSON output."""
        main(['rules', '--json', str(rules_file)])
        data = json.loads(capsys.readouterr().out)
        assert len(data['outer']) == 2
        assert data['exclude'] == []
        assert data['skipped_lines'] == []
        assert data['point'][0]['target_value'] is None

    def test_rules_strict(self, tmp_path, capsys):
        """Test --strict fails on skipped lines."""
        rules = tmp_path / "rules.txt"
        rules.write_text("polygon,NAME,,name,-\n", encoding='utf-8')

        assert main(['rules', str(rules)]) == 0
        assert main(['rules', '--strict', str(rules)]) == 1
        assert "Unknown type polygon" in capsys.readouterr().err


class TestParser:
    """Tests for the argument parser."""

    def test_no_command(self, capsys):
        """Test help is shown without a command."""
        assert main([]) == 0
        assert "shp2osm" in capsys.readouterr().out

    def test_version(self, capsys):
        """Test --version output."""
        with pytest.raises(SystemExit) as excinfo:
            create_parser().parse_args(['--version'])
        assert excinfo.value.code == 0
        assert "shp2osm 1.0.0" in capsys.readouterr().out
