"""Data types shared by the pack, unpack, meta and customize modules."""

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from .schema import DEFAULT_STROKE, STROKE_LEVELS

StrokeName = Literal["light", "regular", "bold"]
Stroke = Union[int, float, StrokeName]

PropertyType = Literal["color", "feature", "slider", "point", "checkbox"]

# Named stroke weights and their levels
STROKE_NAMES: dict[str, int] = {
    "light": 1,
    "regular": 2,
    "bold": 3,
}

# stroke-width multiplier per level
STROKE_RATIOS: dict[int, float] = {
    1: 0.5,
    2: 1.0,
    3: 1.5,
}


@dataclass
class Layer:
    """One packable/unpackable variant of an icon.

    ``state`` lists the states the layer belongs to (None or empty means the
    default state). ``stroke`` is 1, 2 or 3; None means the default (2).
    """

    content: str
    state: list[str] | None = None
    stroke: int | None = None

    @property
    def effective_stroke(self) -> int:
        """Stroke level with the default applied."""
        return self.stroke if self.stroke is not None else DEFAULT_STROKE

    @property
    def has_custom_stroke(self) -> bool:
        """Check if the layer uses a non-default stroke level."""
        return self.effective_stroke != DEFAULT_STROKE


@dataclass
class StateDeclaration:
    """A named state read from the animation source."""

    name: str
    default: bool = False
    time: float | None = None
    duration: float | None = None


@dataclass
class LottieProperty:
    """A customizable property declared by the animation source."""

    name: str
    type: PropertyType
    value: Any = None


@dataclass
class PackMetaData:
    """Metadata stored on the root of a pack."""

    name: str
    features: list[str] = field(default_factory=list)
    colors: dict[str, str] = field(default_factory=dict)
    states: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "features": list(self.features),
            "colors": dict(self.colors),
            "states": list(self.states),
        }


@dataclass
class IconProperties:
    """Requested customization of a pack.

    ``background`` is carried for callers that wrap the output; it has no
    meaning inside the pack format.
    """

    state: str | None = None
    colors: dict[str, str] | None = None
    stroke: Stroke | None = None
    background: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "IconProperties":
        """Build properties from a mapping such as a parsed YAML document.

        Raises:
            ValueError: If a value has the wrong type.
        """
        unknown = set(data) - {"state", "colors", "stroke", "background"}
        if unknown:
            raise ValueError(f"Unknown properties: {', '.join(sorted(unknown))}")

        state = data.get("state")
        if state is not None:
            state = str(state)

        colors = data.get("colors")
        if colors is not None:
            if not isinstance(colors, dict):
                raise ValueError("'colors' must be a mapping of slot to color")
            colors = {str(slot): str(color) for slot, color in colors.items()}

        stroke = data.get("stroke")
        if stroke is not None and stroke_level(stroke) is None:
            raise ValueError(f"Invalid stroke value: {stroke}")

        background = data.get("background")
        if background is not None:
            background = str(background)

        return cls(state=state, colors=colors, stroke=stroke, background=background)


def stroke_level(value: Stroke | str | None) -> int | None:
    """Resolve a requested stroke to a level in the range 1-3.

    Names map to their level; numbers are rounded and clamped.

    Examples:
        >>> stroke_level("bold")
        3
        >>> stroke_level(5)
        3
        >>> stroke_level(0)
        1
        >>> stroke_level(None) is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        name = value.strip().lower()
        if name in STROKE_NAMES:
            return STROKE_NAMES[name]
        try:
            value = float(name)
        except ValueError:
            return None

    try:
        level = int(round(value))
    except (TypeError, ValueError, OverflowError):
        return None

    return min(STROKE_LEVELS[-1], max(STROKE_LEVELS[0], level))


def stroke_ratio(level: int | None) -> float:
    """Return the stroke-width multiplier for a stroke level."""
    if level is None:
        return 1.0
    return STROKE_RATIOS.get(level, 1.0)
