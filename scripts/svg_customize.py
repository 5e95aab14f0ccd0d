#!/usr/bin/env python3
"""Select one state/stroke of an SVG pack and recolor it."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_pack.customize import customize_svg, parse_properties_file
from svg_pack.models import IconProperties


def parse_color_args(color_args: list[str] | None) -> dict[str, str]:
    """Parse ``slot=color`` arguments.

    Raises:
        ValueError: If an argument has no '='.
    """
    colors: dict[str, str] = {}
    for arg in color_args or []:
        if "=" not in arg:
            raise ValueError(f"Invalid color '{arg}', expected slot=color")
        slot, color = arg.split("=", 1)
        colors[slot.strip()] = color.strip()
    return colors


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O error
        - 2: Properties error
        - 3: Input is not a pack
    """
    parser = argparse.ArgumentParser(
        description="Select one state/stroke of an SVG pack and recolor it.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s icon.svg --state morph-single --output out.svg
  %(prog)s icon.svg --stroke bold --color primary=red --color secondary=#08a88a
  %(prog)s icon.svg --properties props.yaml --output out.svg
""",
    )
    parser.add_argument("svg_file", type=Path, help="Path to SVG pack")
    parser.add_argument(
        "--properties", "-p", type=Path, help="YAML file with state/colors/stroke"
    )
    parser.add_argument("--state", help="State to select")
    parser.add_argument("--stroke", help="Stroke: 1, 2, 3, light, regular or bold")
    parser.add_argument(
        "--color",
        "-c",
        action="append",
        metavar="SLOT=COLOR",
        help="Recolor a declared color slot (repeatable)",
    )
    parser.add_argument(
        "--output", "-o", type=Path, help="Output SVG file (default: stdout)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.svg_file.exists():
        print(f"Error: SVG file not found: {args.svg_file}", file=sys.stderr)
        return 1

    # Build properties: file first, command line overrides
    try:
        if args.properties:
            properties = parse_properties_file(args.properties)
        else:
            properties = IconProperties()

        data = {}
        if args.state is not None:
            data["state"] = args.state
        if args.stroke is not None:
            data["stroke"] = args.stroke
        if args.color:
            data["colors"] = {**(properties.colors or {}), **parse_color_args(args.color)}
        if data:
            overrides = IconProperties.from_dict(data)
            for key in data:
                setattr(properties, key, getattr(overrides, key))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: Invalid properties: {e}", file=sys.stderr)
        return 2

    try:
        content = args.svg_file.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: Failed to read SVG: {e}", file=sys.stderr)
        return 1

    result = customize_svg(content, properties)
    if result is None:
        print(f"Error: Not an SVG pack: {args.svg_file}", file=sys.stderr)
        return 3

    if args.output:
        try:
            args.output.write_text(result, encoding="utf-8")
            print(f"Output written to: {args.output}")
        except OSError as e:
            print(f"Error: Failed to write output: {e}", file=sys.stderr)
            return 1
    else:
        print(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
