import logging
import math

from audiovis.bars_renderer import LinearBarsRenderer
from audiovis.config import VisualStyle
from audiovis.radial_renderer import RadialBarsRenderer
from audiovis.waveform_renderer import WaveformRenderer

logger = logging.getLogger(__name__)

RENDERERS = {
    VisualStyle.BARS: LinearBarsRenderer,
    VisualStyle.RADIAL: RadialBarsRenderer,
    VisualStyle.WAVEFORM: WaveformRenderer,
}


def create_renderer(style):
    """Fresh renderer (with empty peak state) for a visual style."""
    return RENDERERS[VisualStyle.parse(style)]()


class FrameScheduler:
    """
    Drives exactly one renderer per display frame.

    Only the renderer of the current style is kept alive. Switching style
    drops it, together with its peak history, and starts a new one.
    """

    def __init__(self):
        self.now_ms = 0.0
        self.style = None
        self.renderer = None

    def tick(self, surface, spectrum_frame, waveform_frame, config, elapsed_ms):
        """Clear `surface` and draw one frame; return what the renderer drew."""
        if elapsed_ms is None or not math.isfinite(elapsed_ms) or elapsed_ms < 0:
            logger.debug(f"Ignoring invalid frame interval {elapsed_ms!r}")
            elapsed_ms = 0.0
        self.now_ms += elapsed_ms

        if config.style is not self.style:
            logger.debug(f"Switching visual style to {config.style.value}")
            self.style = config.style
            self.renderer = create_renderer(config.style)

        surface.clear()
        if config.style is VisualStyle.WAVEFORM:
            frame = waveform_frame
        else:
            frame = spectrum_frame
        if frame is None:
            logger.debug(f"No sample frame for {config.style.value}, drawing a blank frame")
            return []
        return self.renderer.draw(surface, frame, config, self.now_ms, elapsed_ms)
