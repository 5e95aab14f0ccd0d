"""XML helpers for reading and writing SVG trees."""

from typing import Iterator
from xml.etree import ElementTree as ET

# SVG namespace mappings
SVG_NAMESPACES = {
    "svg": "http://www.w3.org/2000/svg",
    "xlink": "http://www.w3.org/1999/xlink",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
}


def register_namespaces() -> None:
    """Register SVG namespaces to preserve prefixes when writing.

    The SVG namespace is registered as the default namespace so output reads
    ``<svg xmlns="...">`` instead of ``<svg:svg ...>``.
    """
    for prefix, uri in SVG_NAMESPACES.items():
        ET.register_namespace("" if prefix == "svg" else prefix, uri)


def _strip_blank_text(root: ET.Element) -> None:
    for elem in root.iter():
        if elem.text is not None and not elem.text.strip():
            elem.text = None
        if elem.tail is not None and not elem.tail.strip():
            elem.tail = None


def parse_svg_text(text: str | None) -> ET.Element | None:
    """Parse SVG markup and return the root element.

    Comments are kept as nodes. Whitespace-only text and tails are dropped.

    Args:
        text: SVG markup.

    Returns:
        Root element, or None if the text is empty or not valid XML.
    """
    if not text or not text.strip():
        return None

    register_namespaces()
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        parser.feed(text)
        root = parser.close()
    except ET.ParseError:
        return None

    _strip_blank_text(root)
    return root


def build_svg(root: ET.Element) -> str:
    """Serialize an element tree to SVG markup (no XML declaration)."""
    register_namespaces()
    return ET.tostring(root, encoding="unicode")


def get_local_name(tag: str) -> str:
    """Extract local name from a namespaced tag.

    Args:
        tag: Full tag name, possibly with namespace.

    Returns:
        Local name without namespace prefix.

    Example:
        >>> get_local_name("{http://www.w3.org/2000/svg}rect")
        'rect'
    """
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def get_namespace(tag: str) -> str | None:
    """Return the namespace URI of a tag, or None for plain tags."""
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def qualify_tag(local_name: str, like: ET.Element) -> str:
    """Build a tag in the same namespace as another element.

    Example:
        >>> root = ET.Element("{http://www.w3.org/2000/svg}svg")
        >>> qualify_tag("g", root)
        '{http://www.w3.org/2000/svg}g'
    """
    namespace = get_namespace(like.tag)
    if namespace:
        return f"{{{namespace}}}{local_name}"
    return local_name


def is_element(node: ET.Element) -> bool:
    """Check if a node is an element (not a comment or processing instruction)."""
    return isinstance(node.tag, str)


def has_local_name(node: ET.Element, local_name: str) -> bool:
    """Check if a node is an element with the given local name."""
    return is_element(node) and get_local_name(node.tag) == local_name


def iter_children_by_name(
    element: ET.Element, local_name: str
) -> Iterator[ET.Element]:
    """Iterate over direct children with the given local name.

    Args:
        element: Parent element.
        local_name: Local tag name to match (e.g. "g", "defs").

    Yields:
        Matching child elements in document order.
    """
    for child in element:
        if has_local_name(child, local_name):
            yield child


def iter_elements(root: ET.Element) -> Iterator[ET.Element]:
    """Iterate over all elements in document order, skipping comments."""
    for elem in root.iter():
        if is_element(elem):
            yield elem


def format_number(value: float, precision: int = 4) -> str:
    """Format a number with at most ``precision`` decimals and no trailing zeros.

    Example:
        >>> format_number(6.0)
        '6'
        >>> format_number(2.25)
        '2.25'
        >>> format_number(1 / 3)
        '0.3333'
    """
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text
