#!/usr/bin/env python3
"""Explode an SVG pack into one SVG file per layer."""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_pack.meta import is_pack
from svg_pack.unpack import layer_file_name, unpack_svg


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O error
        - 3: Input is not a pack
    """
    parser = argparse.ArgumentParser(
        description="Explode an SVG pack into one SVG file per layer."
    )
    parser.add_argument("svg_file", type=Path, help="Path to SVG pack")
    parser.add_argument(
        "--out-dir",
        "-d",
        type=Path,
        help="Output directory (default: next to the pack)",
    )

    args = parser.parse_args()

    if not args.svg_file.exists():
        print(f"Error: SVG file not found: {args.svg_file}", file=sys.stderr)
        return 1

    try:
        content = args.svg_file.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: Failed to read SVG: {e}", file=sys.stderr)
        return 1

    if not is_pack(content):
        print(f"Error: Not an SVG pack: {args.svg_file}", file=sys.stderr)
        return 3

    layers = unpack_svg(content)
    if not layers:
        print(f"Pack has no layers: {args.svg_file}")
        return 0

    out_dir = args.out_dir or args.svg_file.parent
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for index, layer in enumerate(layers):
            out_path = out_dir / layer_file_name(args.svg_file.stem, index, layer)
            out_path.write_text(layer.content, encoding="utf-8")
            state = ", ".join(layer.state) if layer.state else "default"
            stroke = layer.stroke if layer.stroke is not None else "default"
            print(f"{out_path}  (state: {state}, stroke: {stroke})")
    except OSError as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
