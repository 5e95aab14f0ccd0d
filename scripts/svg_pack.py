#!/usr/bin/env python3
"""Pack layer SVGs of one icon into a single SVG pack."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_pack.meta import format_meta_report, meta_svg
from svg_pack.pack import pack_svg, parse_pack_rule_file


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O error
        - 2: Rule file error
        - 3: No layer could be packed
    """
    parser = argparse.ArgumentParser(
        description="Pack layer SVGs of one icon into a single SVG pack.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Rule file example:
  source: icon.json
  layers:
    - file: icon.svg
    - file: icon-morph.svg
      state: [morph-single]
      stroke: bold
""",
    )
    parser.add_argument(
        "--rule", "-r", type=Path, required=True, help="Path to YAML pack rule file"
    )
    parser.add_argument(
        "--output", "-o", type=Path, help="Output SVG file (default: stdout)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a layer state is not declared by the source",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log skipped layers"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.rule.exists():
        print(f"Error: Rule file not found: {args.rule}", file=sys.stderr)
        return 1

    # Parse rule file
    try:
        rule = parse_pack_rule_file(args.rule)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: Failed to parse rule file: {e}", file=sys.stderr)
        return 2

    # Load inputs
    try:
        source = rule.load_source()
        layers = rule.load_layers()
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Failed to read inputs: {e}", file=sys.stderr)
        return 1

    try:
        pack = pack_svg(source, layers, strict=args.strict)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if pack is None:
        print("Error: No layer could be packed.", file=sys.stderr)
        return 3

    if args.output:
        try:
            args.output.write_text(pack, encoding="utf-8")
        except OSError as e:
            print(f"Error: Failed to write output: {e}", file=sys.stderr)
            return 1
        print(format_meta_report(meta_svg(pack)))
        print(f"\nOutput written to: {args.output}")
    else:
        print(pack)

    return 0


if __name__ == "__main__":
    sys.exit(main())
