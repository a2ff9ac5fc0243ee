"""Main shp2osm API.

Provides the high-level ShpToOsm class wiring a shapefile source, a rules
file, the converter and the OSM XML writer together.
"""
import time
from typing import Any, Dict, List, Optional

from shp_core.converter import Converter
from shp_core.export.xml_exporter import OSMXMLWriter
from shp_core.rules.ruleset import RuleDiagnostic, RuleSet, load_rules
from shp_core.sources.shapefile_source import ShapefileSource


class ShpToOsm:
    """Convert shapefiles to OSM XML with a rules file.

    Rules are loaded once and reused for every conversion.
    """

    def __init__(self, rules_file: str, only_tagged: bool = False,
                 source_crs: Optional[str] = None, encoding: str = 'utf-8',
                 generator: str = 'shp2osm'):
        """Initialize and load the rules.

        Args:
            rules_file: Path to the rules file
            only_tagged: Only emit primitives that received at least one tag
            source_crs: Optional CRS overriding the shapefile's .prj
            encoding: DBF text encoding
            generator: Generator name written into the OSM file

        Raises:
            FileNotFoundError: If the rules file does not exist
        """
        self.rules_file = rules_file
        self.only_tagged = only_tagged
        self.source_crs = source_crs
        self.encoding = encoding
        self.generator = generator

        self.ruleset: RuleSet
        self.diagnostics: List[RuleDiagnostic]
        self.ruleset, self.diagnostics = load_rules(rules_file)

    def convert(self, shapefile_path: str, output_file: str) -> Dict[str, Any]:
        """Convert one shapefile to an OSM XML file.

        Args:
            shapefile_path: Input shapefile (with or without .shp)
            output_file: Output .osm path

        Returns:
            Result dict with metadata

        Raises:
            FileNotFoundError: If the shapefile does not exist
            ProjectionError: If its projection can't be determined
            GeometryError: If a feature has invalid geometry; the output file
                then holds everything converted before that feature
        """
        start_time = time.time()
        converter = Converter(self.ruleset, only_tagged=self.only_tagged)

        source = ShapefileSource(shapefile_path, source_crs=self.source_crs,
                                 encoding=self.encoding)
        writer = OSMXMLWriter(output_file, generator=self.generator)

        with source, writer:
            stats = converter.convert(source, writer)

        processing_time = time.time() - start_time
        return {
            'metadata': {
                'input_file': shapefile_path,
                'rules_file': self.rules_file,
                'processing_time_seconds': processing_time,
                'rules': len(self.ruleset),
                'rule_diagnostics': len(self.diagnostics),
                'conversion': {
                    **stats,
                    'skipped_types': dict(stats['skipped_types']),
                },
                **writer.build_metadata(),
            }
        }
