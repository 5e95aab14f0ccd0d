#!/usr/bin/env python3
"""Display the metadata of an SVG pack."""

import argparse
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_pack.meta import format_meta_report, meta_svg


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for I/O error, 3 if not a pack).
    """
    parser = argparse.ArgumentParser(description="Display the metadata of an SVG pack.")
    parser.add_argument("svg_file", type=Path, help="Path to SVG pack")
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-o", "--output", type=Path, help="Output file (default: stdout)"
    )

    args = parser.parse_args()

    if not args.svg_file.exists():
        print(f"Error: File not found: {args.svg_file}", file=sys.stderr)
        return 1

    try:
        content = args.svg_file.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: Failed to read SVG: {e}", file=sys.stderr)
        return 1

    meta = meta_svg(content)
    if meta is None:
        print(f"Error: Not an SVG pack: {args.svg_file}", file=sys.stderr)
        return 3

    if args.format == "json":
        output = json.dumps(meta.to_dict(), indent=2, ensure_ascii=False)
    else:
        output = format_meta_report(meta)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
