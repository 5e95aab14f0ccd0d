"""Shared fixtures for pack tests."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_pack.models import Layer
from svg_pack.pack import pack_svg

SVG_NS = "http://www.w3.org/2000/svg"

PRIMARY = [18 / 255, 19 / 255, 49 / 255]  # #121331
SECONDARY = [8 / 255, 168 / 255, 138 / 255]  # #08a88a

# Default layer: primary stroke, secondary fill, one gradient definition
DEFAULT_SVG = (
    f'<svg xmlns="{SVG_NS}" viewBox="0 0 430 430" width="430" height="430">'
    '<defs><linearGradient id="grad"><stop offset="0" stop-color="#121331"/>'
    "</linearGradient></defs>"
    '<path id="outline" d="M10 10h100" stroke="#121331" stroke-width="4" fill="none"/>'
    '<circle cx="215" cy="215" r="50" fill="#08A88A" stroke="#000000"/>'
    '<rect width="10" height="10" fill="url(#grad)"/>'
    "</svg>"
)

# Morph layer: an ellipse so tests can tell the layers apart
MORPH_SVG = (
    f'<svg xmlns="{SVG_NS}" viewBox="0 0 430 430" width="430" height="430">'
    '<ellipse cx="215" cy="215" rx="80" ry="40" stroke="#121331" stroke-width="4"/>'
    "</svg>"
)

# Stroke variants: a polyline for level 1, a line for level 3
LIGHT_SVG = (
    f'<svg xmlns="{SVG_NS}" viewBox="0 0 430 430">'
    '<polyline points="0 0 10 10" stroke="#121331" stroke-width="2"/>'
    "</svg>"
)
BOLD_SVG = (
    f'<svg xmlns="{SVG_NS}" viewBox="0 0 430 430">'
    '<line x1="0" y1="0" x2="10" y2="10" stroke="#121331" stroke-width="6"/>'
    "</svg>"
)


def make_source(
    name: str | None = "outlet",
    features: list[str] | None = None,
    markers: list[str] | None = None,
) -> dict:
    """Build Lottie data with two color slots, features and state markers."""
    effects = [
        {"nm": "primary", "mn": "ADBE Color Control", "ef": [{"v": {"a": 0, "k": PRIMARY + [1]}}]},
        {"nm": "secondary", "mn": "ADBE Color Control", "ef": [{"v": {"a": 0, "k": SECONDARY + [1]}}]},
    ]
    for feature in features or []:
        effects.append({"nm": feature, "mn": f"Pseudo/{feature}"})

    if markers is None:
        markers = ["default:hover-pinch", "morph-single"]

    data = {
        "v": "5.7.0",
        "layers": [{"nm": "controls", "ty": 3, "ef": effects}],
        "markers": [{"cm": cm, "tm": i * 60, "dr": 60} for i, cm in enumerate(markers)],
    }
    if name is not None:
        data["nm"] = name
    return data


@pytest.fixture
def source() -> dict:
    return make_source(features=["stroke"])


@pytest.fixture
def two_layer_pack(source) -> str:
    """Pack of a default layer and a morph-single layer."""
    pack = pack_svg(
        source,
        [
            Layer(content=DEFAULT_SVG),
            Layer(content=MORPH_SVG, state=["morph-single"]),
        ],
    )
    assert pack is not None
    return pack


@pytest.fixture
def stroke_layer_pack() -> str:
    """Pack with default, light and bold stroke layers."""
    pack = pack_svg(
        make_source(features=["stroke"]),
        [
            Layer(content=DEFAULT_SVG),
            Layer(content=LIGHT_SVG, stroke=1),
            Layer(content=BOLD_SVG, stroke=3),
        ],
    )
    assert pack is not None
    return pack
