"""Reserved pack attributes and their string encodings.

A pack stores its metadata on the root ``svg`` element and its layer
selectors on root-level ``g`` elements:

    <svg data-name="..." data-features="stroke" data-colors="primary:#121331">
        <g>...default layer...</g>
        <g data-state="morph" style="display: none;">...</g>
        <g data-stroke="3" style="display: none;">...</g>
        <defs>...</defs>
    </svg>

Values are decoded into lists, dicts and ints right after parsing and
encoded again only when writing attributes.
"""

ATTR_NAME = "data-name"
ATTR_FEATURES = "data-features"
ATTR_COLORS = "data-colors"
ATTR_STATE = "data-state"
ATTR_STROKE = "data-stroke"

# Root-only attributes, removed whenever a pack is turned back into plain SVG
PACK_ATTRIBUTES = (ATTR_NAME, ATTR_FEATURES, ATTR_COLORS)

DEFAULT_STROKE = 2
STROKE_LEVELS = (1, 2, 3)

HIDDEN_STYLE = "display: none;"

# Scalable stroke width
FEATURE_STROKE = "stroke"
# Discrete stroke layers selected by data-stroke
FEATURE_STROKE_LAYERS = "stroke-layers"

LIST_SEPARATOR = ","
COLOR_SEPARATOR = ":"


def encode_list(values: list[str]) -> str:
    """Encode a list of tags or state names as a comma-joined string."""
    return LIST_SEPARATOR.join(values)


def decode_list(value: str | None) -> list[str]:
    """Decode a comma-joined attribute value.

    Empty items are dropped, so both a missing attribute and ``""`` decode to
    an empty list.

    Example:
        >>> decode_list("morph,hover")
        ['morph', 'hover']
        >>> decode_list(None)
        []
    """
    if not value:
        return []
    return [item.strip() for item in value.split(LIST_SEPARATOR) if item.strip()]


def encode_colors(colors: dict[str, str]) -> str:
    """Encode color slots as ``slot:#hex`` pairs with lower-cased values."""
    return LIST_SEPARATOR.join(
        f"{slot}{COLOR_SEPARATOR}{color.lower()}" for slot, color in colors.items()
    )


def decode_colors(value: str | None) -> dict[str, str]:
    """Decode a ``data-colors`` value into an ordered slot -> hex mapping.

    Pairs without a separator are ignored.

    Example:
        >>> decode_colors("primary:#121331,secondary:#08A88A")
        {'primary': '#121331', 'secondary': '#08a88a'}
    """
    colors: dict[str, str] = {}
    for item in decode_list(value):
        if COLOR_SEPARATOR not in item:
            continue
        slot, color = item.split(COLOR_SEPARATOR, 1)
        slot = slot.strip()
        color = color.strip()
        if slot and color:
            colors[slot] = color.lower()
    return colors


def encode_stroke(stroke: int | None) -> str | None:
    """Encode a stroke level, returning None for the default level."""
    if stroke is None or stroke == DEFAULT_STROKE:
        return None
    return str(stroke)


def decode_stroke(value: str | None) -> int | None:
    """Decode a ``data-stroke`` value.

    Returns:
        The integer level, or None when the attribute is absent or invalid.
    """
    if value is None:
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None
