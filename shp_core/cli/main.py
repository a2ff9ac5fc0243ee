"""CLI main entry point with subcommand structure."""
import argparse
import sys
from typing import Optional

from shp_core import __version__
from shp_core.exceptions import ShpToOsmError


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='shp2osm',
        description='shp2osm - Convert shapefiles to OpenStreetMap XML using tag rules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  shp2osm convert roads.shp rules.txt roads.osm
  shp2osm convert -t buildings.shp rules.txt buildings.osm
  shp2osm rules rules.txt

Rules file format (one rule per line):
  class,source key,source value,target key,target value
  class is one of point, line, outer, inner, exclude
'''
    )

    # Global options
    parser.add_argument('--version', '-V', action='version',
                        version=f'shp2osm {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress non-error output')
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase verbosity')

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', title='commands',
                                        description='Available commands')

    from shp_core.cli.commands.convert import setup_parser as setup_convert
    setup_convert(subparsers)

    from shp_core.cli.commands.rules import setup_parser as setup_rules
    setup_rules(subparsers)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # No command specified - show help
    if not parsed_args.command:
        parser.print_help()
        return 0

    try:
        return parsed_args.func(parsed_args)

    except FileNotFoundError as e:
        print(f"shp2osm: error: File not found: {e}", file=sys.stderr)
        return 3
    except PermissionError as e:
        print(f"shp2osm: error: Permission denied: {e}", file=sys.stderr)
        return 4
    except ShpToOsmError as e:
        print(f"shp2osm: error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 2
    except Exception as e:
        print(f"shp2osm: error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
