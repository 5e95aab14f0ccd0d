"""Read customizable properties and states from Lottie animation data.

Icons declare their customizable properties as expression-control effects on
layers (``layers[].ef[]``) and their states as composition markers
(``markers[]``). The default state marker is written as ``default:<name>``.
"""

import logging
from typing import Any

from .colors import tuple_color_to_hex
from .models import LottieProperty, PropertyType, StateDeclaration

logger = logging.getLogger(__name__)

# Effect match names (``mn``) and the property type they declare
EFFECT_TYPES: dict[str, PropertyType] = {
    "ADBE Color Control": "color",
    "ADBE Slider Control": "slider",
    "ADBE Point Control": "point",
    "ADBE Checkbox Control": "checkbox",
}
FEATURE_EFFECT_PREFIX = "Pseudo/"

DEFAULT_MARKER_PREFIX = "default:"


def _effect_type(match_name: str) -> PropertyType | None:
    if match_name in EFFECT_TYPES:
        return EFFECT_TYPES[match_name]
    if match_name.startswith(FEATURE_EFFECT_PREFIX):
        return "feature"
    return None


def _static_value(effect: dict) -> Any:
    """Return the static value of an effect control.

    Animated values (``a: 1``) use the start value of the first keyframe.
    """
    controls = effect.get("ef")
    if not isinstance(controls, list) or not controls:
        return None

    prop = controls[0].get("v")
    if not isinstance(prop, dict):
        return None

    value = prop.get("k")
    if prop.get("a") and isinstance(value, list) and value:
        first = value[0]
        if isinstance(first, dict):
            return first.get("s")
    return value


def extract_properties(data: dict | None) -> list[LottieProperty]:
    """Extract customizable properties from Lottie data.

    Args:
        data: Parsed Lottie JSON.

    Returns:
        Properties in layer/effect order. The first property with a given
        name wins. Color values are converted to hex.
    """
    if not isinstance(data, dict):
        return []

    result: list[LottieProperty] = []
    seen: set[str] = set()

    for layer in data.get("layers") or []:
        if not isinstance(layer, dict):
            continue

        for effect in layer.get("ef") or []:
            if not isinstance(effect, dict):
                continue

            name = str(effect.get("nm") or "").strip().lower()
            prop_type = _effect_type(str(effect.get("mn") or ""))
            if not name or prop_type is None or name in seen:
                continue

            value = _static_value(effect)

            if prop_type == "color":
                try:
                    value = tuple_color_to_hex(value)
                except (TypeError, ValueError):
                    logger.debug("Skipping color property %r with value %r", name, value)
                    continue

            seen.add(name)
            result.append(LottieProperty(name=name, type=prop_type, value=value))

    return result


def read_states(data: dict | None) -> list[StateDeclaration]:
    """Read state declarations from Lottie markers.

    Each marker comment (``cm``) names one state; a ``default:`` prefix marks
    the default state. When no marker is marked default, an unnamed default
    state is prepended so that exactly one default always exists.

    Args:
        data: Parsed Lottie JSON.

    Returns:
        State declarations in marker order.
    """
    states: list[StateDeclaration] = []
    has_default = False

    markers = data.get("markers") if isinstance(data, dict) else None
    for marker in markers or []:
        if not isinstance(marker, dict):
            continue

        comment = str(marker.get("cm") or "").strip()
        if not comment:
            continue

        is_default = False
        name = comment
        if comment.startswith(DEFAULT_MARKER_PREFIX) and not has_default:
            name = comment[len(DEFAULT_MARKER_PREFIX):]
            is_default = True
            has_default = True

        states.append(
            StateDeclaration(
                name=name,
                default=is_default,
                time=marker.get("tm"),
                duration=marker.get("dr"),
            )
        )

    if not has_default:
        states.insert(0, StateDeclaration(name="", default=True))

    return states
