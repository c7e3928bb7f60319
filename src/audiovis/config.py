"""
Per-frame render configuration.

The UI (or the CLI) produces raw values; `RenderConfig` normalises them on
construction into an immutable snapshot that the renderers can read as is.
"""

import enum
import logging
import math
from dataclasses import dataclass

from audiovis.constants import (
    DEFAULT_ELEMENT_COUNT,
    DEFAULT_INNER_RADIUS_FACTOR,
    DEFAULT_MAX_BAR_LENGTH_PERCENT,
    DEFAULT_PEAK_DECAY_MS,
    MAX_ELEMENT_COUNT,
)

logger = logging.getLogger(__name__)


class VisualStyle(enum.Enum):
    BARS = "bars"
    RADIAL = "radial"
    WAVEFORM = "waveform"

    @classmethod
    def parse(cls, value):
        """Parse a style name, falling back to bars for anything unknown."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        name = _STYLE_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            logger.debug(f"Unknown visual style {value!r}, using bars")
            return cls.BARS


_STYLE_ALIASES = {"circle": "radial", "wave": "waveform"}


class ColorScheme(enum.Enum):
    RAINBOW = "rainbow"
    GRADIENT = "gradient"
    SINGLE = "single"
    WHITE_FADE = "white-fade"
    BLUE_FADE = "blue-fade"
    GREEN_FADE = "green-fade"
    PURPLE_FADE = "purple-fade"
    CYAN_FADE = "cyan-fade"

    @classmethod
    def parse(cls, value):
        """Parse a scheme id, falling back to the single accent colour."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unknown color scheme {value!r}, using single")
            return cls.SINGLE


@dataclass(frozen=True)
class RenderConfig:
    """
    Read-only snapshot of the user-tunable parameters for one frame.

    Raw control values are accepted and normalised on construction, so every
    instance is safe for the renderers to read without further checks.
    """

    style: VisualStyle = VisualStyle.BARS
    element_count: int = DEFAULT_ELEMENT_COUNT
    color_scheme: ColorScheme = ColorScheme.RAINBOW
    peak_decay_ms: float = DEFAULT_PEAK_DECAY_MS
    inner_radius_factor: float = DEFAULT_INNER_RADIUS_FACTOR
    max_bar_length_percent: float = DEFAULT_MAX_BAR_LENGTH_PERCENT
    show_peaks: bool = True

    def __post_init__(self):
        cleaned = {
            "style": VisualStyle.parse(self.style),
            "element_count": _to_count(self.element_count),
            "color_scheme": ColorScheme.parse(self.color_scheme),
            "peak_decay_ms": _to_decay(self.peak_decay_ms),
            "inner_radius_factor": _to_radius_factor(self.inner_radius_factor),
            "max_bar_length_percent": _to_percent(self.max_bar_length_percent),
            "show_peaks": bool(self.show_peaks),
        }
        for name, value in cleaned.items():
            object.__setattr__(self, name, value)


def _to_float(value, default):
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric config value {value!r}, using {default}")
        return default
    if not math.isfinite(number):
        return default
    return number


def _to_count(value):
    count = int(_to_float(value, 0))
    # Zero or negative counts are legal: the renderers simply draw nothing
    return min(count, MAX_ELEMENT_COUNT)


def _to_decay(value):
    return max(0.0, _to_float(value, DEFAULT_PEAK_DECAY_MS))


def _to_radius_factor(value):
    factor = _to_float(value, DEFAULT_INNER_RADIUS_FACTOR)
    if factor <= 0:
        logger.debug(f"Inner radius factor {value!r} out of range, using default")
        return DEFAULT_INNER_RADIUS_FACTOR
    return factor


def _to_percent(value):
    return min(100.0, max(0.0, _to_float(value, DEFAULT_MAX_BAR_LENGTH_PERCENT)))
