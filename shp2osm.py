#!/usr/bin/env python3
"""
shp2osm - Convert shapefiles to OpenStreetMap XML using tag rules

This is the CLI entry point. The implementation is in the shp_core package.

Usage:
    shp2osm convert roads.shp rules.txt roads.osm
    shp2osm convert -t buildings.shp rules.txt buildings.osm
    shp2osm rules rules.txt

For more information, run: shp2osm --help
"""
import sys

# Re-export public API
from shp_core import (
    __version__,
    Converter,
    RuleSet,
    ShpToOsm,
    load_rules,
)

# Re-export CLI entry point
from shp_core.cli.main import main


def cli_main():
    """CLI entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
