"""Convert command - shapefile to OSM XML."""
import sys

from ...api import ShpToOsm
from ...rules.base import MAPPING_CLASSES


def setup_parser(subparsers):
    """Setup the convert subcommand parser."""
    parser = subparsers.add_parser(
        'convert',
        help='Convert a shapefile to OSM XML',
        description='Convert a shapefile to OSM XML using a rules file',
        epilog='''
Examples:
  shp2osm convert roads.shp rules.txt roads.osm
  shp2osm convert -t parcels.shp rules.txt parcels.osm
  shp2osm convert --source-crs EPSG:26915 lakes.shp rules.txt lakes.osm
'''
    )

    parser.add_argument('input', help='Input shapefile')
    parser.add_argument('rules', help='Rules file')
    parser.add_argument('output', help='Output OSM file')
    parser.add_argument(
        '-t', '--tagged-only',
        action='store_true',
        help='Only output primitives that received at least one tag'
    )
    parser.add_argument(
        '--source-crs',
        metavar='CRS',
        help='Source CRS (e.g. EPSG:26915), overrides the .prj file'
    )
    parser.add_argument(
        '--encoding',
        default='utf-8',
        help='DBF attribute encoding (default: utf-8)'
    )
    parser.add_argument(
        '--generator',
        default='shp2osm',
        help='Generator attribute of the OSM file (default: shp2osm)'
    )

    parser.set_defaults(func=run)
    return parser


def print_diagnostics(diagnostics):
    """Print rule diagnostics to stderr."""
    for diagnostic in diagnostics:
        print(diagnostic, file=sys.stderr)


def run(args):
    """Execute the convert command."""
    verbose = getattr(args, 'verbose', 0)
    quiet = getattr(args, 'quiet', False)

    app = ShpToOsm(
        args.rules,
        only_tagged=args.tagged_only,
        source_crs=args.source_crs,
        encoding=args.encoding,
        generator=args.generator,
    )

    print_diagnostics(app.diagnostics)
    if verbose:
        for rule in app.ruleset:
            print(f"Adding rule {rule}", file=sys.stderr)

    if not any(app.ruleset.rules_for(name) for name in MAPPING_CLASSES):
        print("Warning: no mapping rules loaded, output will be untagged", file=sys.stderr)

    result = app.convert(args.input, args.output)
    metadata = result['metadata']
    conversion = metadata['conversion']
    elements = metadata['elements']

    if not quiet:
        print(f"Converted {conversion['features_converted']} of "
              f"{conversion['features_read']} features "
              f"in {metadata['processing_time_seconds']:.3f}s", file=sys.stderr)
        print(f"Wrote {elements['nodes']} nodes, {elements['ways']} ways, "
              f"{elements['relations']} relations to {args.output}", file=sys.stderr)
        for geometry_type, count in sorted(conversion['skipped_types'].items()):
            print(f"Skipped {count} {geometry_type} features", file=sys.stderr)

    return 0
