from audiovis.base_renderer import BaseRenderer, as_frame, peak_paint
from audiovis.binning import aggregate_all
from audiovis.colors import color_for
from audiovis.geometry import rounded_top_bar


class LinearBarsRenderer(BaseRenderer):
    """Vertical frequency bars anchored at the bottom edge, with peak dots."""

    def draw(self, surface, frame, config, now_ms, elapsed_ms):
        frame = as_frame(frame)
        count = config.element_count
        # Peak history never survives a change of bar count, shown or not
        self.peaks.resize(count)
        if count <= 0 or frame is None:
            return []

        values = aggregate_all(frame, count) or [0.0] * count
        width, height = surface.width, surface.height
        bar_width = width / count

        for i, value in enumerate(values):
            bar_height = (value / 255) * height
            x = i * bar_width

            outline = rounded_top_bar(x, height - bar_height, bar_width, height, bar_width / 4)
            surface.fill_path(outline, color_for(value, i, count, config.color_scheme))

            if not config.show_peaks:
                continue
            held, opacity = self._track_peak(i, value, config, now_ms, elapsed_ms)
            if opacity > 0:
                peak_y = height - (held / 255) * height
                surface.fill_circle((x + bar_width / 2, peak_y), bar_width / 3, peak_paint(opacity))

        return values
