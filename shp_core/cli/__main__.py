"""Allow running shp_core.cli as a module.

Usage:
    python -m shp_core.cli --help
    python -m shp_core.cli convert roads.shp rules.txt roads.osm
"""

import sys
from shp_core.cli import main

if __name__ == "__main__":
    sys.exit(main())
