import numpy as np

from audiovis.colors import SolidColor
from audiovis.constants import PEAK_DOT_COLOR
from audiovis.peaks import PeakTracker


class BaseRenderer:
    """
    Common state of the visual styles.

    Every renderer owns its own `PeakTracker`; nothing is shared between
    renderer instances.
    """

    def __init__(self):
        self.peaks = PeakTracker()

    def draw(self, surface, frame, config, now_ms, elapsed_ms):
        """Issue this frame's primitives to `surface` and return the drawn values."""
        raise NotImplementedError

    def _track_peak(self, index, value, config, now_ms, elapsed_ms):
        """Update one peak and return `(held_value, opacity)`."""
        held = self.peaks.update(index, value, now_ms, elapsed_ms, config.peak_decay_ms)
        return held, self.peaks.opacity_of(index, now_ms, config.peak_decay_ms)


def peak_paint(opacity):
    return SolidColor(*PEAK_DOT_COLOR, opacity)


def as_frame(frame):
    """View a sample frame as a 1-D numpy array, or None if there is nothing to draw."""
    if frame is None:
        return None
    return np.asarray(frame).reshape(-1)
