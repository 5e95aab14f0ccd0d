"""Select, recolor and restroke one variant of an SVG pack.

Pipeline: validate -> filter layers -> strip group attributes -> recolor ->
restroke -> serialize. Each stage is skipped when it has nothing to do.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from xml.etree import ElementTree as ET

import yaml

from .colors import parse_color
from .meta import read_meta
from .models import IconProperties, PackMetaData, stroke_level, stroke_ratio
from .optimize import optimize_svg
from .schema import (
    ATTR_STATE,
    ATTR_STROKE,
    DEFAULT_STROKE,
    FEATURE_STROKE,
    FEATURE_STROKE_LAYERS,
    PACK_ATTRIBUTES,
    decode_list,
    decode_stroke,
)
from .utils import (
    build_svg,
    format_number,
    has_local_name,
    iter_children_by_name,
    iter_elements,
    parse_svg_text,
)

logger = logging.getLogger(__name__)

# Presentation attributes that may reference a declared color
COLOR_ATTRIBUTES = ("stroke", "fill", "stop-color")
STROKE_WIDTH_ATTRIBUTE = "stroke-width"


@dataclass
class ColorNode:
    """An attribute holding a declared color."""

    element: ET.Element
    attribute: str
    slot: str

    @property
    def value(self) -> str:
        return self.element.get(self.attribute, "")

    def set(self, value: str) -> None:
        self.element.set(self.attribute, value)


def parse_properties_file(path: Path) -> IconProperties:
    """Parse a YAML file with customization properties.

    Example file::

        state: morph-single
        stroke: bold
        colors:
          primary: red
          secondary: "#08a88a"

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the properties are invalid.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return IconProperties()
    if not isinstance(data, dict):
        raise ValueError("Properties file must be a YAML dictionary")

    return IconProperties.from_dict(data)


def effective_stroke(group: ET.Element) -> int:
    """Return the stroke level of a layer group with the default applied."""
    stroke = decode_stroke(group.get(ATTR_STROKE))
    return stroke if stroke is not None else DEFAULT_STROKE


def has_stroke_layers(root: ET.Element, meta: PackMetaData) -> bool:
    """Check if the pack selects stroke weights by layer."""
    if FEATURE_STROKE_LAYERS not in meta.features:
        return False
    return any(
        effective_stroke(group) != DEFAULT_STROKE
        for group in iter_children_by_name(root, "g")
    )


def is_layer_selected(
    group: ET.Element,
    state: str | None,
    stroke: int | None,
    stroke_layers: bool,
) -> bool:
    """Decide whether a layer group survives selection.

    Args:
        group: Root-level <g> of the pack.
        state: Requested state, already checked against the pack's states
            (None selects the default layers).
        stroke: Requested stroke level, or None.
        stroke_layers: Whether the pack selects strokes by layer.
    """
    layer_states = decode_list(group.get(ATTR_STATE))
    if state is not None:
        if state not in layer_states:
            return False
    elif layer_states:
        return False

    if stroke_layers:
        wanted = stroke if stroke is not None else DEFAULT_STROKE
        if effective_stroke(group) != wanted:
            return False

    return True


def filter_layers(
    root: ET.Element, meta: PackMetaData, properties: IconProperties
) -> None:
    """Remove the layer groups that don't match the request.

    Children other than <g> are kept.
    """
    state = properties.state if properties.state in meta.states else None
    stroke = stroke_level(properties.stroke)
    stroke_layers = has_stroke_layers(root, meta)

    for child in list(root):
        if not has_local_name(child, "g"):
            continue
        if not is_layer_selected(child, state, stroke, stroke_layers):
            root.remove(child)


def strip_layer_attributes(root: ET.Element) -> None:
    """Clear the selection attributes of the surviving layer groups."""
    for group in iter_children_by_name(root, "g"):
        group.attrib.clear()


def find_color_nodes(root: ET.Element, colors: dict[str, str]) -> list[ColorNode]:
    """Find every color attribute whose value is a declared color.

    Matching is case-insensitive. When two slots share a value the last
    slot wins.

    Args:
        root: Tree to search.
        colors: Declared slot -> hex mapping.

    Returns:
        ColorNode handles in document order.
    """
    slots_by_color: dict[str, str] = {}
    for slot, color in colors.items():
        slots_by_color[color.lower()] = slot

    found: list[ColorNode] = []
    for elem in iter_elements(root):
        for attribute in COLOR_ATTRIBUTES:
            value = elem.get(attribute)
            if not value:
                continue
            slot = slots_by_color.get(value.strip().lower())
            if slot is not None:
                found.append(ColorNode(element=elem, attribute=attribute, slot=slot))
    return found


def apply_colors(
    root: ET.Element, declared: dict[str, str], requested: dict[str, str]
) -> int:
    """Recolor declared color slots.

    Requested slots that are not declared are ignored.

    Returns:
        Number of attributes changed.
    """
    nodes = find_color_nodes(root, declared)

    changed = 0
    for slot, color in requested.items():
        if slot not in declared:
            logger.debug("Ignoring undeclared color slot %r", slot)
            continue

        value = parse_color(color)
        for node in nodes:
            if node.slot == slot:
                node.set(value)
                changed += 1
    return changed


def apply_stroke_ratio(root: ET.Element, ratio: float) -> int:
    """Multiply every numeric stroke-width attribute by ``ratio``.

    Returns:
        Number of attributes changed.
    """
    changed = 0
    for elem in iter_elements(root):
        value = elem.get(STROKE_WIDTH_ATTRIBUTE)
        if value is None:
            continue
        try:
            width = float(value)
        except ValueError:
            continue
        elem.set(STROKE_WIDTH_ATTRIBUTE, format_number(width * ratio))
        changed += 1
    return changed


def customize_svg_tree(
    root: ET.Element, meta: PackMetaData, properties: IconProperties
) -> ET.Element:
    """Apply selection and customization to a parsed pack in place.

    Returns:
        The same root, without pack attributes.
    """
    filter_layers(root, meta, properties)
    strip_layer_attributes(root)

    if properties.colors and meta.colors:
        apply_colors(root, meta.colors, properties.colors)

    if properties.stroke is not None and FEATURE_STROKE in meta.features:
        ratio = stroke_ratio(stroke_level(properties.stroke))
        if ratio != 1:
            apply_stroke_ratio(root, ratio)

    for attribute in PACK_ATTRIBUTES:
        root.attrib.pop(attribute, None)

    return root


def customize_svg(
    svg: str | None, properties: IconProperties | None = None
) -> str | None:
    """Customize an SVG pack.

    Args:
        svg: Pack markup.
        properties: State, colors and stroke to apply. ``background`` is
            ignored here; it is for callers that wrap the result.

    Returns:
        Standalone SVG markup, or None if the input is not a pack. A request
        that matches no layer yields an empty SVG.
    """
    root = parse_svg_text(svg)
    if root is None:
        return None

    meta = read_meta(root)
    if meta is None:
        logger.debug("Not customizing: input is not a pack")
        return None

    customize_svg_tree(root, meta, properties or IconProperties())
    return optimize_svg(build_svg(root), prefix_ids=True)
