"""Command-line interface for shp2osm.

This module provides the CLI entry point for the shp2osm command.
It is used by setuptools to create the console script.

Usage:
    # After pip install:
    shp2osm --help
    shp2osm convert roads.shp rules.txt roads.osm

    # Or via Python:
    python -m shp_core.cli
"""

import sys
from shp_core.cli.main import main as _main, create_parser

__all__ = ['main', 'create_parser']


def main() -> int:
    """Entry point for the shp2osm CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        return _main() or 0
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
