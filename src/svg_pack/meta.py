"""Read metadata from an SVG pack."""

from xml.etree import ElementTree as ET

from .models import PackMetaData
from .schema import (
    ATTR_COLORS,
    ATTR_FEATURES,
    ATTR_NAME,
    ATTR_STATE,
    decode_colors,
    decode_list,
)
from .utils import iter_children_by_name, parse_svg_text


def read_meta(root: ET.Element) -> PackMetaData | None:
    """Read pack metadata from a parsed tree.

    Only root attributes and the data-state of root-level groups are read.

    Returns:
        PackMetaData, or None if the root has no data-name.
    """
    name = root.get(ATTR_NAME)
    if not name:
        return None

    states: list[str] = []
    for group in iter_children_by_name(root, "g"):
        for state in decode_list(group.get(ATTR_STATE)):
            if state not in states:
                states.append(state)

    return PackMetaData(
        name=name,
        features=decode_list(root.get(ATTR_FEATURES)),
        colors=decode_colors(root.get(ATTR_COLORS)),
        states=states,
    )


def meta_svg(svg: str | None) -> PackMetaData | None:
    """Extract metadata from an SVG pack.

    Args:
        svg: Pack markup.

    Returns:
        PackMetaData, or None if the text is empty, unparseable or not a pack.
    """
    root = parse_svg_text(svg)
    if root is None:
        return None
    return read_meta(root)


def is_pack(svg: str | None) -> bool:
    """Check if markup is an SVG pack."""
    return meta_svg(svg) is not None


def format_meta_report(meta: PackMetaData) -> str:
    """Format pack metadata as text.

    Args:
        meta: Pack metadata.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    lines.append(f"Name: {meta.name}")
    lines.append(f"Features: {', '.join(meta.features) or '(none)'}")

    if meta.colors:
        lines.append("Colors:")
        width = max(len(slot) for slot in meta.colors)
        for slot, color in meta.colors.items():
            lines.append(f"  {slot:<{width}}  {color}")
    else:
        lines.append("Colors: (none)")

    lines.append(f"States: {', '.join(meta.states) or '(default only)'}")

    return "\n".join(lines)
