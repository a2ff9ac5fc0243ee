"""Rules command - validate and list a rules file."""
import json

from ...rules.base import RULE_CLASSES
from ...rules.ruleset import load_rules
from .convert import print_diagnostics


def setup_parser(subparsers):
    """Setup the rules subcommand parser."""
    parser = subparsers.add_parser(
        'rules',
        help='Validate and list a rules file',
        description='Parse a rules file and list the rules per geometry class'
    )

    parser.add_argument('rules', help='Rules file')
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit with status 1 if any line was skipped'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output as JSON'
    )

    parser.set_defaults(func=run)
    return parser


def run(args):
    """Execute the rules command."""
    ruleset, diagnostics = load_rules(args.rules)

    print_diagnostics(diagnostics)

    if args.json:
        output = {
            name: [
                {
                    'source_key': r.source_key,
                    'source_value': r.source_value,
                    'target_key': r.target_key,
                    'target_value': r.target_value,
                }
                for r in ruleset.rules_for(name)
            ]
            for name in RULE_CLASSES
        }
        output['skipped_lines'] = [d.line_number for d in diagnostics]
        print(json.dumps(output, indent=2))
    else:
        for name in RULE_CLASSES:
            rules = ruleset.rules_for(name)
            print(f"{name} ({len(rules)})")
            for rule in rules:
                print(f"  {rule}")
        print(f"\nTotal: {len(ruleset)} rules, {len(diagnostics)} skipped lines")

    if args.strict and diagnostics:
        return 1
    return 0
