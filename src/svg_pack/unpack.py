"""Split an SVG pack back into its layers."""

import copy
import logging
import re
from xml.etree import ElementTree as ET

from .meta import read_meta
from .models import Layer
from .optimize import optimize_svg
from .schema import ATTR_STATE, ATTR_STROKE, PACK_ATTRIBUTES, decode_list, decode_stroke
from .utils import build_svg, iter_children_by_name, parse_svg_text, qualify_tag

logger = logging.getLogger(__name__)


def build_base_root(root: ET.Element) -> ET.Element:
    """Build the root shared by all unpacked layers.

    The base keeps the pack root's tag and attributes without the pack
    attributes, plus one <defs> holding the children of all root-level defs.
    """
    attributes = {k: v for k, v in root.attrib.items() if k not in PACK_ATTRIBUTES}
    base = ET.Element(root.tag, attributes)

    definitions: list[ET.Element] = []
    for defs in iter_children_by_name(root, "defs"):
        definitions.extend(copy.deepcopy(child) for child in defs)

    if definitions:
        defs_element = ET.SubElement(base, qualify_tag("defs", root))
        defs_element.extend(definitions)

    return base


def unpack_svg_tree(root: ET.Element) -> list[tuple[ET.Element, ET.Element]]:
    """Split a pack tree into one standalone tree per layer group.

    Returns:
        (layer root, source group) pairs in group order.
    """
    base = build_base_root(root)

    result: list[tuple[ET.Element, ET.Element]] = []
    for group in iter_children_by_name(root, "g"):
        layer_root = copy.deepcopy(base)
        layer_root.extend(copy.deepcopy(child) for child in group)
        result.append((layer_root, group))

    return result


def unpack_svg(svg: str | None) -> list[Layer]:
    """Unpack an SVG pack into individual layers.

    Each layer is optimized with unique id prefixes so unpacked layers can be
    used together on one page.

    Args:
        svg: Pack markup.

    Returns:
        Layers in pack order, or an empty list if the input is not a pack.
    """
    root = parse_svg_text(svg)
    if root is None or read_meta(root) is None:
        logger.debug("Not unpacking: input is not a pack")
        return []

    layers: list[Layer] = []
    for layer_root, group in unpack_svg_tree(root):
        content = optimize_svg(build_svg(layer_root), prefix_ids=True)
        layers.append(
            Layer(
                content=content,
                state=decode_list(group.get(ATTR_STATE)),
                stroke=decode_stroke(group.get(ATTR_STROKE)),
            )
        )

    return layers


# Characters that can't appear in a file name component
UNSAFE_FILE_CHARS_RE = re.compile(r"[\\/:*?\"<>|\x00-\x1f]")


def layer_file_name(stem: str, index: int, layer: Layer) -> str:
    """Build the output file name of an unpacked layer.

    State names come from the pack, so path separators and other characters
    that are unsafe in file names are replaced with ``_``.

    Example:
        >>> layer_file_name("icon", 1, Layer(content="", state=["morph"], stroke=3))
        'icon-1-morph-stroke3.svg'
    """
    parts = [stem, str(index)]
    if layer.state:
        parts.append(UNSAFE_FILE_CHARS_RE.sub("_", "+".join(layer.state)))
    if layer.stroke is not None:
        parts.append(f"stroke{layer.stroke}")
    return "-".join(parts) + ".svg"
