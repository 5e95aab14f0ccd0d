"""SVG tree optimizer used when turning packs back into standalone SVGs.

Passes, in order:
- remove comments and <metadata>
- collapse attribute-less <g> wrappers into their parent
- drop empty containers
- round float tokens in numeric attributes
- optionally prefix every id (and its references) with a unique prefix so
  several outputs can live on one page without id collisions
"""

import logging
import re
import uuid
from typing import Callable
from xml.etree import ElementTree as ET

from .utils import (
    build_svg,
    format_number,
    get_local_name,
    is_element,
    iter_elements,
    parse_svg_text,
)

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 4

URL_REF_RE = re.compile(r"url\(\s*(['\"]?)#([^)'\"\s]+)\1\s*\)")
CSS_ID_RE = re.compile(r"#([A-Za-z_][\w-]*)")
# Innermost {...} block of a style sheet; its contents are declarations
DECLARATION_BLOCK_RE = re.compile(r"\{[^{}]*\}")

# General numeric token (int or float, optional exponent)
NUM_TOKEN_RE = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.|\d+)(?:[eE][-+]?\d+)?")

# Attributes we treat as numeric / contain numeric lists
NUMERIC_ATTRS = frozenset(
    [
        "x", "y", "x1", "y1", "x2", "y2", "dx", "dy",
        "width", "height", "r", "rx", "ry", "cx", "cy", "fx", "fy",
        "opacity", "fill-opacity", "stroke-opacity", "stroke-width",
        "stroke-miterlimit", "stroke-dashoffset", "stroke-dasharray",
        "offset", "points", "viewBox", "transform", "gradientTransform",
        "patternTransform", "d", "stdDeviation",
    ]
)

REMOVED_ELEMENTS = frozenset(["metadata"])
CONTAINER_ELEMENTS = frozenset(["g", "defs"])


def generate_id_prefix() -> str:
    """Return a fresh id prefix that always starts with a letter."""
    return "i" + uuid.uuid4().hex[:9]


def _remove_child(parent: ET.Element, child: ET.Element) -> None:
    """Remove a child, keeping its tail text in place."""
    if child.tail:
        index = list(parent).index(child)
        if index > 0:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + child.tail
        else:
            parent.text = (parent.text or "") + child.tail
    parent.remove(child)


def remove_comments_and_metadata(root: ET.Element) -> None:
    """Drop comments, processing instructions and <metadata> blocks."""
    for parent in list(iter_elements(root)):
        for child in list(parent):
            if not is_element(child) or get_local_name(child.tag) in REMOVED_ELEMENTS:
                _remove_child(parent, child)


def collapse_groups(element: ET.Element) -> None:
    """Replace attribute-less <g> wrappers with their children.

    Groups carrying text are left alone.
    """
    for child in list(element):
        if is_element(child):
            collapse_groups(child)

    index = 0
    while index < len(element):
        child = element[index]
        if (
            is_element(child)
            and get_local_name(child.tag) == "g"
            and not child.attrib
            and not child.text
            and not child.tail
        ):
            grandchildren = list(child)
            element.remove(child)
            for offset, grandchild in enumerate(grandchildren):
                element.insert(index + offset, grandchild)
            index += len(grandchildren)
        else:
            index += 1


def remove_empty_containers(element: ET.Element) -> None:
    """Remove <g> and <defs> elements with no children and no id."""
    for child in list(element):
        if not is_element(child):
            continue
        remove_empty_containers(child)
        if (
            get_local_name(child.tag) in CONTAINER_ELEMENTS
            and len(child) == 0
            and not (child.text and child.text.strip())
            and child.get("id") is None
        ):
            _remove_child(element, child)


def _round_token(token: str, precision: int) -> str:
    # Only round floats; integers pass through.
    if not any(c in token for c in ".eE"):
        return token
    try:
        value = float(token)
    except ValueError:
        return token
    return format_number(value, precision)


def round_numbers_in_string(value: str, precision: int = DEFAULT_PRECISION) -> str:
    """Round every float token in a string to ``precision`` decimals.

    Example:
        >>> round_numbers_in_string("M1.234567 2.50000L3 4")
        'M1.2346 2.5L3 4'
    """
    return NUM_TOKEN_RE.sub(lambda m: _round_token(m.group(0), precision), value)


def round_numeric_attributes(root: ET.Element, precision: int = DEFAULT_PRECISION) -> None:
    """Round float tokens in numeric attributes and path data."""
    for elem in iter_elements(root):
        for attr, value in list(elem.attrib.items()):
            if get_local_name(attr) not in NUMERIC_ATTRS or "url(" in value:
                continue
            elem.set(attr, round_numbers_in_string(value, precision))


def _rewrite_selectors(text: str, replace: Callable[[re.Match], str]) -> str:
    # Only selector text is rewritten; hex colors inside declarations stay.
    parts: list[str] = []
    last = 0
    for match in DECLARATION_BLOCK_RE.finditer(text):
        parts.append(CSS_ID_RE.sub(replace, text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(CSS_ID_RE.sub(replace, text[last:]))
    return "".join(parts)


def prefix_ids(root: ET.Element, prefix: str) -> dict[str, str]:
    """Prefix every id in the tree and rewrite references to it.

    Rewrites ``url(#id)`` in any attribute, ``#id`` in ``href`` and
    ``xlink:href``, and id selectors and ``url(#id)`` inside <style>.

    Args:
        root: Root element (modified in place).
        prefix: Prefix to prepend.

    Returns:
        Mapping of old id to new id.
    """
    mapping: dict[str, str] = {}
    for elem in iter_elements(root):
        elem_id = elem.get("id")
        if elem_id and elem_id not in mapping:
            mapping[elem_id] = prefix + elem_id

    if not mapping:
        return mapping

    def replace_url(match: re.Match) -> str:
        quote, ref = match.group(1), match.group(2)
        if ref not in mapping:
            return match.group(0)
        return f"url({quote}#{mapping[ref]}{quote})"

    def replace_selector(match: re.Match) -> str:
        ref = match.group(1)
        return f"#{mapping[ref]}" if ref in mapping else match.group(0)

    for elem in iter_elements(root):
        for attr, value in list(elem.attrib.items()):
            if attr == "id":
                if value in mapping:
                    elem.set(attr, mapping[value])
            elif get_local_name(attr) == "href":
                if value.startswith("#") and value[1:] in mapping:
                    elem.set(attr, "#" + mapping[value[1:]])
            elif "url(" in value:
                elem.set(attr, URL_REF_RE.sub(replace_url, value))

        if get_local_name(elem.tag) == "style" and elem.text:
            text = URL_REF_RE.sub(replace_url, elem.text)
            elem.text = _rewrite_selectors(text, replace_selector)

    return mapping


def optimize_svg_tree(
    root: ET.Element,
    prefix: str | None = None,
    precision: int = DEFAULT_PRECISION,
) -> ET.Element:
    """Run all optimization passes on a tree in place.

    Args:
        root: Root element.
        prefix: Id prefix to apply, or None to keep ids unchanged.
        precision: Decimal places kept for float values.

    Returns:
        The same root element.
    """
    remove_comments_and_metadata(root)
    collapse_groups(root)
    remove_empty_containers(root)
    round_numeric_attributes(root, precision)
    if prefix:
        prefix_ids(root, prefix)
    return root


def optimize_svg(
    content: str,
    prefix_ids: bool = False,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Optimize SVG markup.

    Args:
        content: SVG markup.
        prefix_ids: Prefix every id with a fresh unique prefix.
        precision: Decimal places kept for float values.

    Returns:
        Optimized markup. Unparseable input is returned unchanged.
    """
    root = parse_svg_text(content)
    if root is None:
        logger.debug("Skipping optimization of unparseable SVG")
        return content

    prefix = generate_id_prefix() if prefix_ids else None
    optimize_svg_tree(root, prefix=prefix, precision=precision)
    return build_svg(root)
