import numpy as np

from audiovis.base_renderer import BaseRenderer, as_frame, peak_paint
from audiovis.binning import aggregate, aggregate_all, filler_range
from audiovis.colors import SolidColor, color_for
from audiovis.constants import BASELINE_COLOR, RADIAL_LINE_WIDTH, RADIAL_PEAK_DOT_RADIUS
from audiovis.geometry import pol2cart


class RadialBarsRenderer(BaseRenderer):
    """
    Frequency bars radiating out of a circle.

    The spectrum is mirrored onto both semicircles: each half starts at the
    top pole with the lowest frequencies and sweeps down its own side. The
    halves leave a gap at the bottom pole, which is covered by one extra
    filler segment fed from a fixed mid-spectrum band. The filler owns the
    last peak slot (index `element_count`).

    Because every bin is drawn twice, only `element_count // 2` bins are
    computed, so a radial ring has half the frequency resolution of a bar
    chart with the same count. This mirroring is deliberate.
    """

    def draw(self, surface, frame, config, now_ms, elapsed_ms):
        frame = as_frame(frame)
        count = config.element_count
        self.peaks.resize(count + 1 if count > 0 else 0)
        if count <= 0 or frame is None:
            return []

        width, height = surface.width, surface.height
        center = (width / 2, height / 2)
        inner_radius = min(width, height) / config.inner_radius_factor
        max_length = inner_radius * (config.max_bar_length_percent / 100)
        half = count // 2

        # Baseline
        surface.stroke_circle(center, inner_radius, SolidColor(*BASELINE_COLOR), 1)

        values = aggregate_all(frame, half) or [0.0] * half
        drawn = []
        for direction, offset in ((1, 0), (-1, half)):
            for i, value in enumerate(values):
                angle = -np.pi / 2 + direction * (i / half) * np.pi
                self._draw_segment(
                    surface,
                    config,
                    center,
                    inner_radius,
                    max_length,
                    angle,
                    value,
                    offset + i,
                    color_for(value, offset + i, half * 2, config.color_scheme),
                    now_ms,
                    elapsed_ms,
                )
                drawn.append(value)

        # Seam filler at the bottom pole, outside the binning scheme
        filler_value = aggregate(frame, filler_range(len(frame)))
        self._draw_segment(
            surface,
            config,
            center,
            inner_radius,
            max_length,
            np.pi / 2,
            filler_value,
            count,
            color_for(filler_value, half, max(half * 2, 1), config.color_scheme),
            now_ms,
            elapsed_ms,
        )
        drawn.append(filler_value)
        return drawn

    def _draw_segment(
        self,
        surface,
        config,
        center,
        inner_radius,
        max_length,
        angle,
        value,
        peak_index,
        paint,
        now_ms,
        elapsed_ms,
    ):
        bar_length = (value / 255) * max_length
        start = pol2cart(inner_radius, angle, center)
        end = pol2cart(inner_radius + bar_length, angle, center)
        surface.stroke_path([start, end], paint, RADIAL_LINE_WIDTH)

        if not config.show_peaks:
            return
        held, opacity = self._track_peak(peak_index, value, config, now_ms, elapsed_ms)
        if opacity > 0:
            peak_radius = inner_radius + (held / 255) * max_length
            surface.fill_circle(
                pol2cart(peak_radius, angle, center), RADIAL_PEAK_DOT_RADIUS, peak_paint(opacity)
            )
