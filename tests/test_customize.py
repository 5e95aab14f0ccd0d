"""Tests for svg_pack.customize module."""

import pytest
from pathlib import Path
from xml.etree import ElementTree as ET

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_pack.customize import (
    apply_colors,
    apply_stroke_ratio,
    customize_svg,
    find_color_nodes,
    is_layer_selected,
    parse_properties_file,
)
from svg_pack.models import IconProperties, Layer
from svg_pack.pack import pack_svg
from svg_pack.utils import get_local_name, parse_svg_text

from conftest import DEFAULT_SVG, PRIMARY, SVG_NS, make_source


def local_names(element: ET.Element) -> list[str]:
    return [get_local_name(child.tag) for child in element]


def find(root: ET.Element, name: str) -> ET.Element:
    return root.find(f".//{{{SVG_NS}}}{name}")


def customize(svg: str, **kwargs) -> ET.Element:
    result = customize_svg(svg, IconProperties(**kwargs))
    assert result is not None
    return ET.fromstring(result)


class TestIsLayerSelected:
    """Tests for is_layer_selected function."""

    def test_default_layer(self):
        group = ET.Element("g")
        assert is_layer_selected(group, None, None, False) is True
        assert is_layer_selected(group, "morph", None, False) is False

    def test_state_layer(self):
        group = ET.Element("g", {"data-state": "morph,hover"})
        assert is_layer_selected(group, None, None, False) is False
        assert is_layer_selected(group, "hover", None, False) is True

    def test_stroke_layers(self):
        default = ET.Element("g")
        bold = ET.Element("g", {"data-stroke": "3"})
        assert is_layer_selected(default, None, None, True) is True
        assert is_layer_selected(bold, None, None, True) is False
        assert is_layer_selected(bold, None, 3, True) is True
        assert is_layer_selected(default, None, 3, True) is False

    def test_stroke_ignored_without_stroke_layers(self):
        bold = ET.Element("g", {"data-stroke": "3"})
        assert is_layer_selected(bold, None, 1, False) is True


class TestSelection:
    """Tests for layer selection in customize_svg."""

    def test_default(self, two_layer_pack):
        root = customize(two_layer_pack)
        assert local_names(root) == ["path", "circle", "rect", "defs"]
        assert find(root, "ellipse") is None

    def test_state(self, two_layer_pack):
        root = customize(two_layer_pack, state="morph-single")
        assert local_names(root) == ["ellipse", "defs"]
        assert find(root, "path") is None

    def test_unknown_state_selects_default(self, two_layer_pack):
        root = customize(two_layer_pack, state="nope")
        assert local_names(root) == ["path", "circle", "rect", "defs"]

    def test_no_properties(self, two_layer_pack):
        root = ET.fromstring(customize_svg(two_layer_pack))
        assert find(root, "ellipse") is None
        assert find(root, "path") is not None

    def test_output_is_plain_svg(self, two_layer_pack):
        root = customize(two_layer_pack, state="morph-single")
        assert root.get("data-name") is None
        assert root.get("data-features") is None
        assert root.get("data-colors") is None
        assert root.get("viewBox") == "0 0 430 430"
        for elem in root.iter():
            assert elem.get("data-state") is None
            assert elem.get("style") != "display: none;"

    def test_ids_prefixed(self, two_layer_pack):
        root = customize(two_layer_pack)
        gradient = find(root, "linearGradient")
        assert gradient.get("id") != "grad"
        assert find(root, "rect").get("fill") == f"url(#{gradient.get('id')})"

    def test_other_root_children_kept(self):
        svg = (
            f'<svg xmlns="{SVG_NS}" data-name="x">'
            '<title>icon</title><g><path/></g><g data-state="m"><circle/></g>'
            "</svg>"
        )
        root = customize(svg)
        assert local_names(root) == ["title", "path"]


class TestStrokeLayerSelection:
    """Tests for stroke layer selection in customize_svg."""

    def test_default(self, stroke_layer_pack):
        root = customize(stroke_layer_pack)
        assert local_names(root) == ["path", "circle", "rect", "defs"]

    @pytest.mark.parametrize("stroke", [3, "bold", 5, 2.6])
    def test_bold(self, stroke_layer_pack, stroke):
        root = customize(stroke_layer_pack, stroke=stroke)
        assert local_names(root) == ["line", "defs"]
        # Selected by layer, not scaled
        assert root[0].get("stroke-width") == "6"

    @pytest.mark.parametrize("stroke", [0, 1, "light"])
    def test_light(self, stroke_layer_pack, stroke):
        root = customize(stroke_layer_pack, stroke=stroke)
        assert local_names(root) == ["polyline", "defs"]

    def test_regular(self, stroke_layer_pack):
        root = customize(stroke_layer_pack, stroke="regular")
        assert local_names(root) == ["path", "circle", "rect", "defs"]

    def test_empty_selection(self):
        svg = (
            f'<svg xmlns="{SVG_NS}" data-name="x" data-features="stroke-layers">'
            '<g data-stroke="1" style="display: none;"><path/></g>'
            '<g data-stroke="3" data-state="m" style="display: none;"><circle/></g>'
            "</svg>"
        )
        result = customize_svg(svg, IconProperties(state="m", stroke=1))
        assert result is not None
        root = ET.fromstring(result)
        assert get_local_name(root.tag) == "svg"
        assert len(root) == 0


class TestRecolor:
    """Tests for recoloring in customize_svg."""

    def test_primary(self, two_layer_pack):
        root = customize(two_layer_pack, colors={"primary": "#FF0000"})
        assert find(root, "path").get("stroke") == "#ff0000"
        assert find(root, "stop").get("stop-color") == "#ff0000"
        circle = find(root, "circle")
        assert circle.get("fill") == "#08A88A"
        assert circle.get("stroke") == "#000000"

    def test_secondary_case_insensitive(self, two_layer_pack):
        root = customize(two_layer_pack, colors={"secondary": "red"})
        circle = find(root, "circle")
        assert circle.get("fill") == "#ff0000"
        assert circle.get("stroke") == "#000000"
        assert find(root, "path").get("stroke") == "#121331"

    def test_rgb_value(self, two_layer_pack):
        root = customize(two_layer_pack, colors={"primary": "rgb(0, 0, 255)"})
        assert find(root, "path").get("stroke") == "#0000ff"

    def test_undeclared_slot_ignored(self, two_layer_pack):
        root = customize(two_layer_pack, colors={"tertiary": "#ff0000"})
        assert find(root, "path").get("stroke") == "#121331"
        assert find(root, "circle").get("fill") == "#08A88A"

    def test_selected_layer_only(self, two_layer_pack):
        root = customize(two_layer_pack, state="morph-single", colors={"primary": "blue"})
        assert find(root, "ellipse").get("stroke") == "#0000ff"

    @pytest.mark.parametrize("slot,recolored", [("secondary", True), ("primary", False)])
    def test_shared_value_owned_by_last_slot(self, slot, recolored):
        source = make_source()
        # secondary declared with the same value as primary
        source["layers"][0]["ef"][1]["ef"][0]["v"]["k"] = PRIMARY + [1]
        pack = pack_svg(source, [Layer(content=DEFAULT_SVG)])

        root = customize(pack, colors={slot: "#ff0000"})
        assert (find(root, "path").get("stroke") == "#ff0000") is recolored


class TestRestroke:
    """Tests for stroke scaling in customize_svg."""

    @pytest.mark.parametrize(
        "stroke,expected",
        [("bold", "6"), (3, "6"), ("light", "2"), (1, "2"), ("regular", "4"), (None, "4")],
    )
    def test_ratio(self, two_layer_pack, stroke, expected):
        root = customize(two_layer_pack, stroke=stroke)
        assert find(root, "path").get("stroke-width") == expected

    def test_no_stroke_feature(self):
        svg = (
            f'<svg xmlns="{SVG_NS}" data-name="x" data-features="">'
            '<g><path stroke-width="4"/></g></svg>'
        )
        root = customize(svg, stroke="bold")
        assert find(root, "path").get("stroke-width") == "4"


class TestColorHelpers:
    """Tests for find_color_nodes, apply_colors and apply_stroke_ratio."""

    def test_find_color_nodes(self):
        root = parse_svg_text(
            '<svg><g fill="#ABCDEF"><path stroke="#abcdef" fill="none"/></g>'
            '<stop stop-color="#111111"/></svg>'
        )
        nodes = find_color_nodes(root, {"a": "#abcdef", "b": "#111111"})
        assert [(get_local_name(n.element.tag), n.attribute, n.slot) for n in nodes] == [
            ("g", "fill", "a"),
            ("path", "stroke", "a"),
            ("stop", "stop-color", "b"),
        ]

    def test_shared_value_last_slot_wins(self):
        root = parse_svg_text('<svg><path fill="#111111"/></svg>')
        nodes = find_color_nodes(root, {"a": "#111111", "b": "#111111"})
        assert [n.slot for n in nodes] == ["b"]

    def test_apply_colors_count(self):
        root = parse_svg_text('<svg><path fill="#111111" stroke="#111111"/></svg>')
        assert apply_colors(root, {"a": "#111111"}, {"a": "#222222", "z": "#333333"}) == 2
        assert root[0].get("fill") == "#222222"

    def test_apply_stroke_ratio(self):
        root = parse_svg_text(
            '<svg><path stroke-width="3"/><path stroke-width="inherit"/><path/></svg>'
        )
        assert apply_stroke_ratio(root, 1.5) == 1
        assert root[0].get("stroke-width") == "4.5"
        assert root[1].get("stroke-width") == "inherit"


class TestNotAPack:
    """Tests for customize_svg with non-pack input."""

    @pytest.mark.parametrize("svg", [None, "", "not xml", DEFAULT_SVG])
    def test_returns_none(self, svg):
        assert customize_svg(svg, IconProperties()) is None


class TestParsePropertiesFile:
    """Tests for parse_properties_file function."""

    def test_parse(self, tmp_path):
        path = tmp_path / "props.yaml"
        path.write_text(
            "state: morph-single\n"
            "stroke: bold\n"
            "colors:\n"
            "  primary: red\n"
            '  secondary: "#08a88a"\n'
        )
        assert parse_properties_file(path) == IconProperties(
            state="morph-single",
            stroke="bold",
            colors={"primary": "red", "secondary": "#08a88a"},
        )

    def test_empty_file(self, tmp_path):
        path = tmp_path / "props.yaml"
        path.write_text("")
        assert parse_properties_file(path) == IconProperties()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "props.yaml"
        path.write_text("size: 10\n")
        with pytest.raises(ValueError, match="Unknown properties"):
            parse_properties_file(path)

    def test_invalid_stroke(self, tmp_path):
        path = tmp_path / "props.yaml"
        path.write_text("stroke: heavy\n")
        with pytest.raises(ValueError, match="Invalid stroke"):
            parse_properties_file(path)

    def test_not_a_dict(self, tmp_path):
        path = tmp_path / "props.yaml"
        path.write_text("- a\n")
        with pytest.raises(ValueError, match="YAML dictionary"):
            parse_properties_file(path)
