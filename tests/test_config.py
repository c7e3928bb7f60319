import math

import pytest

from audiovis.config import ColorScheme, RenderConfig, VisualStyle
from audiovis.constants import DEFAULT_INNER_RADIUS_FACTOR, DEFAULT_PEAK_DECAY_MS


@pytest.mark.parametrize(
    "raw, style",
    [
        ("bars", VisualStyle.BARS),
        ("Radial", VisualStyle.RADIAL),
        ("circle", VisualStyle.RADIAL),
        ("wave", VisualStyle.WAVEFORM),
        ("waveform", VisualStyle.WAVEFORM),
        ("laser", VisualStyle.BARS),
        (None, VisualStyle.BARS),
    ],
)
def test_style_parsing(raw, style):
    assert VisualStyle.parse(raw) is style


def test_scheme_parsing_falls_back_to_single():
    assert ColorScheme.parse("cyan-fade") is ColorScheme.CYAN_FADE
    assert ColorScheme.parse("plaid") is ColorScheme.SINGLE


def test_defaults():
    config = RenderConfig()
    assert config.style is VisualStyle.BARS
    assert config.color_scheme is ColorScheme.RAINBOW
    assert config.show_peaks


def test_construction_sanitises_values():
    config = RenderConfig(
        style="circle",
        element_count="32",
        color_scheme="unknown",
        peak_decay_ms=-20,
        inner_radius_factor=0,
        max_bar_length_percent=250,
    )
    assert config.style is VisualStyle.RADIAL
    assert config.element_count == 32
    assert config.color_scheme is ColorScheme.SINGLE
    assert config.peak_decay_ms == 0
    assert config.inner_radius_factor == DEFAULT_INNER_RADIUS_FACTOR
    assert config.max_bar_length_percent == 100


def test_non_numeric_values_use_defaults():
    config = RenderConfig(peak_decay_ms="slow", inner_radius_factor=math.inf)
    assert config.peak_decay_ms == DEFAULT_PEAK_DECAY_MS
    assert config.inner_radius_factor == DEFAULT_INNER_RADIUS_FACTOR


def test_negative_count_is_kept_for_renderers_to_ignore():
    assert RenderConfig(element_count=-4).element_count == -4


def test_config_is_immutable():
    config = RenderConfig()
    with pytest.raises(AttributeError):
        config.element_count = 3


def test_direct_construction_is_normalised():
    config = RenderConfig(
        style="laser",
        element_count="12",
        color_scheme="neon",
        peak_decay_ms=-5,
        inner_radius_factor=0,
        max_bar_length_percent=-10,
        show_peaks=0,
    )
    assert config.style is VisualStyle.BARS
    assert config.element_count == 12
    assert config.color_scheme is ColorScheme.SINGLE
    assert config.peak_decay_ms == 0
    assert config.inner_radius_factor == DEFAULT_INNER_RADIUS_FACTOR
    assert config.max_bar_length_percent == 0
    assert config.show_peaks is False


def test_direct_construction_accepts_aliases():
    assert RenderConfig(style="circle").style is VisualStyle.RADIAL
    assert RenderConfig(style=VisualStyle.WAVEFORM).style is VisualStyle.WAVEFORM
