"""
Colour mapping for the visualisers.

Every colour handed to a surface is a paint descriptor: a flat `SolidColor`,
a flat `HslColor` (used by the rainbow scheme so the hue survives exactly),
or a `LinearGradient` with colour stops.
"""

import colorsys
from typing import NamedTuple, Tuple

from audiovis.config import ColorScheme


class SolidColor(NamedTuple):
    red: float
    green: float
    blue: float
    alpha: float = 1.0


class HslColor(NamedTuple):
    hue: float  # degrees
    saturation: float = 1.0
    lightness: float = 0.5
    alpha: float = 1.0


class LinearGradient(NamedTuple):
    start: Tuple[float, float]
    end: Tuple[float, float]
    stops: Tuple[Tuple[float, SolidColor], ...]


ACCENT_COLOR = SolidColor(76, 175, 80)  # #4CAF50

_FADE_COLORS = {
    ColorScheme.WHITE_FADE: (255, 255, 255),
    ColorScheme.BLUE_FADE: (0, 100, 255),
    ColorScheme.GREEN_FADE: (0, 220, 100),
    ColorScheme.PURPLE_FADE: (180, 0, 255),
    ColorScheme.CYAN_FADE: (0, 220, 220),
}

# Waveform variants
WAVEFORM_RAINBOW = HslColor(180)
WAVEFORM_GRADIENT_STOPS = (
    (0.0, SolidColor(0, 255, 255)),
    (0.5, SolidColor(255, 0, 255)),
    (1.0, SolidColor(255, 255, 0)),
)
WAVEFORM_REFERENCE_VALUE = 200


def color_for(value, index, total, scheme):
    """Map a magnitude (0-255) and its element position to a paint."""
    scheme = ColorScheme.parse(scheme)

    if scheme is ColorScheme.RAINBOW:
        hue = 360 * index / total if total > 0 else 0.0
        return HslColor(hue)

    intensity = min(max(value, 0), 255) / 255
    if scheme is ColorScheme.GRADIENT:
        return SolidColor(
            round(intensity * 255), round(intensity * 100), round(255 - intensity * 255)
        )

    if scheme in _FADE_COLORS:
        red, green, blue = _FADE_COLORS[scheme]
        return SolidColor(red, green, blue, 0.1 + intensity * 0.9)

    return ACCENT_COLOR


def waveform_color(width, scheme):
    """Stroke paint for the waveform line, spanning `width` pixels."""
    scheme = ColorScheme.parse(scheme)
    if scheme is ColorScheme.RAINBOW:
        return WAVEFORM_RAINBOW
    if scheme is ColorScheme.GRADIENT:
        return LinearGradient((0, 0), (width, 0), WAVEFORM_GRADIENT_STOPS)
    return color_for(WAVEFORM_REFERENCE_VALUE, 0, 1, scheme)


def to_rgba(paint):
    """Flatten a solid paint to an (r, g, b, a) tuple with 0-255 channels."""
    if isinstance(paint, HslColor):
        red, green, blue = colorsys.hls_to_rgb(
            (paint.hue % 360) / 360, paint.lightness, paint.saturation
        )
        return (red * 255, green * 255, blue * 255, paint.alpha)
    if isinstance(paint, SolidColor):
        return tuple(paint)
    raise TypeError(f"Cannot flatten {type(paint).__name__} to a single colour")
