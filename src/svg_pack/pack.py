"""Pack several layer SVGs of one icon into a single SVG pack."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from xml.etree import ElementTree as ET

import yaml

from .lottie import extract_properties, read_states
from .models import STROKE_NAMES, Layer, LottieProperty, StateDeclaration
from .schema import (
    ATTR_COLORS,
    ATTR_FEATURES,
    ATTR_NAME,
    ATTR_STATE,
    ATTR_STROKE,
    FEATURE_STROKE,
    FEATURE_STROKE_LAYERS,
    HIDDEN_STYLE,
    STROKE_LEVELS,
    decode_list,
    encode_colors,
    encode_list,
    encode_stroke,
)
from .utils import build_svg, get_local_name, has_local_name, parse_svg_text, qualify_tag

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "unknown"


@dataclass
class PackLayerRule:
    """One layer entry of a pack rule file."""

    file: Path
    state: list[str] = field(default_factory=list)
    stroke: int | None = None


@dataclass
class PackRule:
    """Pack rule configuration.

    Paths are resolved relative to the rule file.
    """

    source: Path
    layers: list[PackLayerRule] = field(default_factory=list)

    def load_source(self) -> dict:
        """Load the Lottie JSON source."""
        with open(self.source, "r", encoding="utf-8") as f:
            return json.load(f)

    def load_layers(self) -> list[Layer]:
        """Read every layer file into a Layer."""
        return [
            Layer(
                content=layer.file.read_text(encoding="utf-8"),
                state=list(layer.state) or None,
                stroke=layer.stroke,
            )
            for layer in self.layers
        ]


def _parse_layer_stroke(value) -> int | None:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in STROKE_NAMES:
        return STROKE_NAMES[value.strip().lower()]
    if isinstance(value, int) and not isinstance(value, bool) and value in STROKE_LEVELS:
        return value
    raise ValueError(
        f"Invalid layer stroke: {value} (expected 1, 2, 3, light, regular or bold)"
    )


def parse_pack_rule_file(rule_path: Path) -> PackRule:
    """Parse a YAML pack rule file.

    Example rule file::

        source: icon.json
        layers:
          - file: icon.svg
          - file: icon-morph.svg
            state: [morph-single]
            stroke: bold

    Args:
        rule_path: Path to the YAML rule file.

    Returns:
        Parsed PackRule.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the rule format is invalid.
    """
    rule_path = Path(rule_path)
    with open(rule_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError("Rule file must be a YAML dictionary")
    if "source" not in data:
        raise ValueError("Rule file must have 'source' field")
    if not isinstance(data.get("layers"), list) or not data["layers"]:
        raise ValueError("Rule file must have a non-empty 'layers' list")

    base_dir = rule_path.parent

    layers: list[PackLayerRule] = []
    for layer_data in data["layers"]:
        if not isinstance(layer_data, dict) or "file" not in layer_data:
            raise ValueError("Each layer must have 'file' field")

        state = layer_data.get("state") or []
        if isinstance(state, str):
            state = decode_list(state)
        elif isinstance(state, list):
            state = [str(item) for item in state]
        else:
            raise ValueError("Layer 'state' must be a string or a list")

        layers.append(
            PackLayerRule(
                file=base_dir / layer_data["file"],
                state=state,
                stroke=_parse_layer_stroke(layer_data.get("stroke")),
            )
        )

    return PackRule(source=base_dir / data["source"], layers=layers)


def find_state(
    layer: Layer, states: list[StateDeclaration]
) -> StateDeclaration | None:
    """Find the declaration a layer belongs to.

    A layer without states matches the default declaration; otherwise the
    first declaration named in the layer's state list matches.
    """
    for declaration in states:
        if not layer.state:
            if declaration.default:
                return declaration
        elif declaration.name in layer.state:
            return declaration
    return None


def build_features(
    properties: list[LottieProperty], has_stroke_layers: bool
) -> list[str]:
    """Build the pack feature list.

    Stroke layers replace the scalable ``stroke`` feature with
    ``stroke-layers``.
    """
    features = [p.name for p in properties if p.type == "feature"]
    if has_stroke_layers:
        features = [f for f in features if f != FEATURE_STROKE]
        features.append(FEATURE_STROKE_LAYERS)
    return features


def build_colors(properties: list[LottieProperty]) -> dict[str, str]:
    """Build the slot -> hex mapping of declared colors."""
    return {p.name: str(p.value).lower() for p in properties if p.type == "color"}


def _is_pack_root(root: ET.Element) -> bool:
    return bool(root.get(ATTR_NAME))


def create_layer_group(
    root: ET.Element, layer: Layer, state: StateDeclaration
) -> ET.Element:
    """Create the <g> element for a layer (without children).

    Non-default layers are hidden so a plain renderer shows only the default.
    """
    group = ET.Element(qualify_tag("g", root))

    stroke = encode_stroke(layer.stroke)
    if stroke is not None:
        group.set(ATTR_STROKE, stroke)

    if layer.state and not state.default:
        group.set(ATTR_STATE, encode_list(layer.state))

    if not state.default or layer.has_custom_stroke:
        group.set("style", HIDDEN_STYLE)

    return group


def pack_svg_tree(
    name: str,
    properties: list[LottieProperty],
    states: list[StateDeclaration],
    layers: list[Layer],
    strict: bool = False,
) -> ET.Element | None:
    """Pack layers into a pack element tree.

    Args:
        name: Icon name stored in data-name.
        properties: Declared color and feature properties.
        states: Declared states.
        layers: Layers in paint order.
        strict: Raise instead of skipping layers that match no state.

    Returns:
        Root element of the pack, or None if no layer was accepted.

    Raises:
        ValueError: If strict is set and a layer matches no declared state.
    """
    has_stroke_layers = any(layer.has_custom_stroke for layer in layers)

    root: ET.Element | None = None
    defs: list[ET.Element] = []

    for index, layer in enumerate(layers):
        item = parse_svg_text(layer.content)

        if item is None or get_local_name(item.tag) != "svg" or len(item) == 0:
            logger.debug("Skipping layer %d: not a non-empty SVG", index)
            continue

        if _is_pack_root(item):
            logger.debug("Skipping layer %d: already a pack", index)
            continue

        state = find_state(layer, states)
        if state is None:
            if strict:
                raise ValueError(
                    f"Layer {index} state {layer.state} matches no declared state"
                )
            logger.debug("Skipping layer %d: state %s is not declared", index, layer.state)
            continue

        if root is None:
            root = ET.Element(item.tag, dict(item.attrib))
            root.set(ATTR_NAME, name or UNKNOWN_NAME)
            root.set(ATTR_FEATURES, encode_list(build_features(properties, has_stroke_layers)))
            root.set(ATTR_COLORS, encode_colors(build_colors(properties)))

        group = create_layer_group(root, layer, state)
        for child in list(item):
            if has_local_name(child, "defs"):
                defs.extend(list(child))
            else:
                group.append(child)

        root.append(group)

    if root is None:
        return None

    if defs:
        defs_element = ET.SubElement(root, qualify_tag("defs", root))
        defs_element.extend(defs)

    return root


def pack_svg(
    source: dict,
    layers: list[Layer],
    strict: bool = False,
) -> str | None:
    """Pack layer SVGs into a single SVG pack.

    Args:
        source: Lottie data of the icon; provides the name, declared
            properties and states.
        layers: Layers in paint order.
        strict: Raise instead of skipping layers that match no state.

    Returns:
        Pack markup, or None if no layer was accepted.
    """
    properties = extract_properties(source)
    states = read_states(source)
    name = (source or {}).get("nm") or UNKNOWN_NAME

    root = pack_svg_tree(str(name), properties, states, layers, strict=strict)
    if root is None:
        logger.debug("No layers accepted for pack %r", name)
        return None

    return build_svg(root)
