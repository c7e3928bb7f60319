from audiovis.base_renderer import BaseRenderer, as_frame, peak_paint
from audiovis.colors import waveform_color
from audiovis.constants import (
    WAVEFORM_LINE_WIDTH,
    WAVEFORM_PEAK_DOT_RADIUS,
    WAVEFORM_PEAK_STRIDE,
    ZERO_CROSSING,
)


class WaveformRenderer(BaseRenderer):
    """
    Time-domain amplitude as one polyline across the surface width.

    With peaks enabled every sample's distance from the zero crossing is
    tracked, but only every `WAVEFORM_PEAK_STRIDE`-th peak is drawn.
    """

    def draw(self, surface, frame, config, now_ms, elapsed_ms):
        frame = as_frame(frame)
        if frame is None or len(frame) == 0:
            return []

        width, height = surface.width, surface.height
        slice_width = width / len(frame)
        points = [
            (i * slice_width, (float(sample) / ZERO_CROSSING) * height / 2)
            for i, sample in enumerate(frame)
        ]
        self.peaks.resize(len(frame))
        surface.stroke_path(points, waveform_color(width, config.color_scheme), WAVEFORM_LINE_WIDTH)

        if config.show_peaks:
            self._draw_peaks(surface, frame, config, now_ms, elapsed_ms, slice_width)
        return points

    def _draw_peaks(self, surface, frame, config, now_ms, elapsed_ms, slice_width):
        half_height = surface.height / 2

        for i, sample in enumerate(frame):
            offset = float(sample) - ZERO_CROSSING
            distance = min(abs(offset) * 255 / ZERO_CROSSING, 255)
            held, opacity = self._track_peak(i, distance, config, now_ms, elapsed_ms)
            if i % WAVEFORM_PEAK_STRIDE or opacity <= 0:
                continue
            side = 1 if offset >= 0 else -1
            y = half_height + side * (held / 255) * half_height
            surface.fill_circle((i * slice_width, y), WAVEFORM_PEAK_DOT_RADIUS, peak_paint(opacity))
