"""Allow running shp_core as a module.

Usage:
    python -m shp_core --help
    python -m shp_core convert roads.shp rules.txt roads.osm
"""

import sys
from shp_core.cli import main

if __name__ == "__main__":
    sys.exit(main())
