"""SVG Pack - Multi-layer icon containers stored as a single SVG."""

__version__ = "0.1.0"

from .models import (
    IconProperties,
    Layer,
    LottieProperty,
    PackMetaData,
    StateDeclaration,
)
from .pack import (
    PackRule,
    pack_svg,
    pack_svg_tree,
    parse_pack_rule_file,
)
from .meta import (
    format_meta_report,
    is_pack,
    meta_svg,
)
from .unpack import unpack_svg
from .customize import (
    customize_svg,
    parse_properties_file,
)
from .optimize import optimize_svg
from .lottie import extract_properties, read_states

__all__ = [
    # Models
    "IconProperties",
    "Layer",
    "LottieProperty",
    "PackMetaData",
    "StateDeclaration",
    # Pack
    "PackRule",
    "pack_svg",
    "pack_svg_tree",
    "parse_pack_rule_file",
    # Meta
    "format_meta_report",
    "is_pack",
    "meta_svg",
    # Unpack
    "unpack_svg",
    # Customize
    "customize_svg",
    "parse_properties_file",
    # Collaborators
    "optimize_svg",
    "extract_properties",
    "read_states",
]
