import math

import numpy as np
import pytest

from audiovis.bars_renderer import LinearBarsRenderer
from audiovis.binning import bin_for
from audiovis.colors import HslColor, LinearGradient
from audiovis.config import RenderConfig
from audiovis.radial_renderer import RadialBarsRenderer
from audiovis.surface import RecordingSurface
from audiovis.waveform_renderer import WaveformRenderer

from conftest import flat_frame


def _top(op):
    return min(y for _, y in op.points)


def _segment_length(op):
    (x0, y0), (x1, y1) = op.points
    return math.hypot(x1 - x0, y1 - y0)


class TestLinearBars:
    def test_flat_input(self, surface, make_config):
        renderer = LinearBarsRenderer()
        config = make_config(element_count=4, color_scheme="single")

        values = renderer.draw(surface, flat_frame(128), config, 0, 0)

        assert values == [128, 128, 128, 128]
        bars = surface.of_kind("fill_path")
        assert len(bars) == 4
        for bar in bars:
            assert surface.height - _top(bar) == pytest.approx(128 / 255 * surface.height)
            assert max(y for _, y in bar.points) == surface.height

    def test_bars_span_the_width(self, surface, make_config):
        LinearBarsRenderer().draw(surface, flat_frame(255), make_config(element_count=4), 0, 0)
        bars = surface.of_kind("fill_path")
        assert min(x for x, _ in bars[0].points) == 0
        assert max(x for x, _ in bars[-1].points) == surface.width

    def test_rainbow_colors(self, surface, make_config):
        LinearBarsRenderer().draw(surface, flat_frame(100), make_config(element_count=4), 0, 0)
        hues = [op.paint.hue for op in surface.of_kind("fill_path")]
        assert hues == [0, 90, 180, 270]

    def test_peak_dots_fade(self, make_config):
        renderer = LinearBarsRenderer()
        config = make_config(element_count=4, peak_decay_ms=1000)

        first = RecordingSurface(400, 300)
        renderer.draw(first, flat_frame(128), config, 0, 0)
        dots = first.of_kind("fill_circle")
        assert len(dots) == 4
        assert all(dot.paint.alpha == 1.0 for dot in dots)
        assert dots[0].radius == pytest.approx(100 / 3)
        assert dots[0].center == pytest.approx((50, 300 - 128 / 255 * 300))

        second = RecordingSurface(400, 300)
        renderer.draw(second, flat_frame(0), config, 500, 500)
        dots = second.of_kind("fill_circle")
        assert len(dots) == 4
        assert dots[0].paint.alpha == pytest.approx(0.5)
        # 128 - 255 * 500 / 1000 leaves half a step
        assert dots[0].center[1] == pytest.approx(300 - 0.5 / 255 * 300)

        third = RecordingSurface(400, 300)
        renderer.draw(third, flat_frame(0), config, 600, 100)
        assert third.of_kind("fill_circle") == []

    def test_resize_discards_peaks(self, make_config):
        renderer = LinearBarsRenderer()
        frame = np.zeros(1024, dtype=np.uint8)
        third = bin_for(16, len(frame))[2]
        frame[third.start : third.end] = 255

        renderer.draw(RecordingSurface(400, 300), frame, make_config(element_count=16), 0, 0)
        assert renderer.peaks.opacity_of(2, 0, 1000) == 1.0

        surface = RecordingSurface(400, 300)
        renderer.draw(surface, np.zeros(1024, dtype=np.uint8), make_config(element_count=8), 0, 0)
        assert len(renderer.peaks) == 8
        assert all(renderer.peaks.opacity_of(i, 0, 1000) == 0 for i in range(8))
        assert surface.of_kind("fill_circle") == []

    def test_peaks_disabled(self, surface, make_config):
        renderer = LinearBarsRenderer()
        renderer.draw(surface, flat_frame(200), make_config(element_count=4, show_peaks=False), 0, 0)
        assert surface.of_kind("fill_circle") == []
        assert all(state.value == 0 for state in renderer.peaks.states)

    @pytest.mark.parametrize("count", [0, -5])
    def test_no_elements_draws_nothing(self, surface, make_config, count):
        assert LinearBarsRenderer().draw(surface, flat_frame(200), make_config(element_count=count), 0, 0) == []
        assert surface.ops == []

    def test_empty_frame_draws_flat_bars(self, surface, make_config):
        values = LinearBarsRenderer().draw(surface, [], make_config(element_count=3), 0, 0)
        assert values == [0, 0, 0]
        assert all(_top(op) == surface.height for op in surface.of_kind("fill_path"))
        assert surface.of_kind("fill_circle") == []

    def test_zero_decay_shows_no_peaks(self, surface, make_config):
        renderer = LinearBarsRenderer()
        renderer.draw(surface, flat_frame(200), make_config(element_count=4, peak_decay_ms=0), 0, 16)
        assert surface.of_kind("fill_circle") == []

    def test_count_change_with_peaks_hidden_discards_peaks(self, make_config):
        renderer = LinearBarsRenderer()
        renderer.draw(RecordingSurface(400, 300), flat_frame(200), make_config(element_count=16), 0, 0)
        assert renderer.peaks.value_of(2) == 200

        hidden = make_config(element_count=8, show_peaks=False)
        renderer.draw(RecordingSurface(400, 300), flat_frame(200), hidden, 0, 0)

        surface = RecordingSurface(400, 300)
        renderer.draw(surface, flat_frame(0), make_config(element_count=16), 0, 0)
        assert all(state.value == 0 for state in renderer.peaks.states)
        assert surface.of_kind("fill_circle") == []

    def test_count_dropping_to_zero_discards_peaks(self, make_config):
        renderer = LinearBarsRenderer()
        renderer.draw(RecordingSurface(400, 300), flat_frame(200), make_config(element_count=16), 0, 0)
        renderer.draw(RecordingSurface(400, 300), flat_frame(200), make_config(element_count=0), 0, 0)
        renderer.draw(RecordingSurface(400, 300), flat_frame(0), make_config(element_count=16), 0, 0)
        assert renderer.peaks.value_of(2) == 0


class TestRadialBars:
    def _draw(self, config, frame=None, width=600, height=400):
        surface = RecordingSurface(width, height)
        renderer = RadialBarsRenderer()
        drawn = renderer.draw(surface, flat_frame(128) if frame is None else frame, config, 0, 0)
        return renderer, surface, drawn

    def test_baseline_circle(self, make_config):
        _, surface, _ = self._draw(make_config(style="radial", element_count=10))
        (baseline,) = surface.of_kind("stroke_circle")
        assert baseline.center == (300, 200)
        assert baseline.radius == pytest.approx(400 / 3)
        assert baseline.paint.alpha == pytest.approx(0.2)

    @pytest.mark.parametrize("count, segments", [(10, 11), (9, 9), (1, 1)])
    def test_filler_always_drawn(self, make_config, count, segments):
        renderer, surface, drawn = self._draw(make_config(style="radial", element_count=count))

        strokes = surface.of_kind("stroke_path")
        assert len(strokes) == segments
        assert len(drawn) == segments

        filler = strokes[-1]
        inner = 400 / 3
        assert filler.points[0] == pytest.approx((300, 200 + inner))
        assert filler.points[1][1] > filler.points[0][1]

        assert len(renderer.peaks) == count + 1
        assert renderer.peaks.value_of(count) == 128

    def test_odd_count_leaves_spare_slot_unused(self, make_config):
        renderer, _, _ = self._draw(make_config(style="radial", element_count=9))
        assert renderer.peaks.value_of(8) == 0
        assert renderer.peaks.value_of(7) == 128

    def test_halves_sweep_from_top_in_both_directions(self, make_config):
        _, surface, _ = self._draw(make_config(style="radial", element_count=4))
        inner = 400 / 3
        right_top, right_side, left_top, left_side, _ = surface.of_kind("stroke_path")

        assert right_top.points[0] == pytest.approx((300, 200 - inner))
        assert left_top.points[0] == pytest.approx((300, 200 - inner))
        assert right_side.points[0] == pytest.approx((300 + inner, 200))
        assert left_side.points[0] == pytest.approx((300 - inner, 200))

    def test_bar_length_scales_with_max_length(self, make_config):
        config = make_config(style="radial", element_count=4, max_bar_length_percent=50)
        _, surface, _ = self._draw(config, frame=flat_frame(255))
        inner = 400 / 3
        for op in surface.of_kind("stroke_path"):
            assert _segment_length(op) == pytest.approx(inner * 0.5)

    def test_inner_radius_factor(self, make_config):
        config = make_config(style="radial", element_count=4, inner_radius_factor=4)
        _, surface, _ = self._draw(config)
        assert surface.of_kind("stroke_circle")[0].radius == pytest.approx(100)

    def test_peak_dots_on_segment_angle(self, make_config):
        _, surface, _ = self._draw(make_config(style="radial", element_count=4), frame=flat_frame(255))
        dots = surface.of_kind("fill_circle")
        assert len(dots) == 5
        inner = 400 / 3
        # Second right-hand segment points straight to the right
        assert dots[1].center == pytest.approx((300 + 2 * inner, 200))
        assert dots[1].radius == 3

    def test_mirrored_colors(self, make_config):
        _, surface, _ = self._draw(make_config(style="radial", element_count=4))
        hues = [op.paint.hue for op in surface.of_kind("stroke_path")]
        assert hues[:4] == [0, 90, 180, 270]

    def test_no_elements_draws_nothing(self, make_config):
        _, surface, drawn = self._draw(make_config(style="radial", element_count=0))
        assert surface.ops == []
        assert drawn == []

    def test_count_change_with_peaks_hidden_discards_peaks(self, make_config):
        renderer = RadialBarsRenderer()
        renderer.draw(RecordingSurface(600, 400), flat_frame(200), make_config(style="radial", element_count=10), 0, 0)
        assert renderer.peaks.value_of(2) == 200

        hidden = make_config(style="radial", element_count=6, show_peaks=False)
        renderer.draw(RecordingSurface(600, 400), flat_frame(200), hidden, 0, 0)
        assert len(renderer.peaks) == 7

        surface = RecordingSurface(600, 400)
        renderer.draw(surface, flat_frame(0), make_config(style="radial", element_count=10), 0, 0)
        assert len(renderer.peaks) == 11
        assert all(state.value == 0 for state in renderer.peaks.states)
        assert surface.of_kind("fill_circle") == []

    def test_zero_radius_factor_uses_default(self):
        surface = RecordingSurface(600, 400)
        config = RenderConfig(style="radial", element_count=4, inner_radius_factor=0)
        RadialBarsRenderer().draw(surface, flat_frame(128), config, 0, 0)
        assert surface.of_kind("stroke_circle")[0].radius == pytest.approx(400 / 3)


class TestWaveform:
    def test_polyline_across_width(self, make_config):
        surface = RecordingSurface(200, 100)
        points = WaveformRenderer().draw(surface, flat_frame(128, 100), make_config(style="waveform"), 0, 0)

        (line,) = surface.of_kind("stroke_path")
        assert len(line.points) == 100
        assert line.points == tuple(points)
        assert all(y == 50 for _, y in line.points)
        assert line.points[1][0] == 2
        assert line.paint == HslColor(180)
        assert surface.of_kind("fill_circle") == []

    def test_sample_mapping(self, make_config):
        surface = RecordingSurface(200, 100)
        frame = np.array([0, 64, 255], dtype=np.uint8)
        WaveformRenderer().draw(surface, frame, make_config(style="waveform"), 0, 0)
        ys = [y for _, y in surface.of_kind("stroke_path")[0].points]
        assert ys == pytest.approx([0, 25, 255 / 128 * 50])

    def test_gradient_spans_width(self, make_config):
        surface = RecordingSurface(200, 100)
        config = make_config(style="waveform", color_scheme="gradient")
        WaveformRenderer().draw(surface, flat_frame(128, 10), config, 0, 0)
        paint = surface.of_kind("stroke_path")[0].paint
        assert isinstance(paint, LinearGradient)
        assert paint.end == (200, 0)

    def test_peak_dots_at_stride(self, make_config):
        surface = RecordingSurface(240, 100)
        renderer = WaveformRenderer()
        renderer.draw(surface, flat_frame(255, 120), make_config(style="waveform"), 0, 0)

        dots = surface.of_kind("fill_circle")
        assert [dot.center[0] for dot in dots] == [0, 100, 200]
        assert len(renderer.peaks) == 120
        held = 127 * 255 / 128
        assert dots[0].center[1] == pytest.approx(50 + held / 255 * 50)

    def test_empty_frame(self, surface, make_config):
        assert WaveformRenderer().draw(surface, [], make_config(style="waveform"), 0, 0) == []
        assert surface.ops == []
