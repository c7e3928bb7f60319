import math
from dataclasses import dataclass

MAX_VALUE = 255.0


@dataclass
class PeakState:
    """Held peak of one displayed element."""

    value: float = 0.0
    set_at: float = -math.inf


class PeakTracker:
    """
    Peak hold-and-decay for a fixed number of elements.

    Time is always passed in by the caller (milliseconds), so the tracker is
    deterministic. Changing the size throws away every held peak.
    """

    def __init__(self, size=0):
        self.states = []
        self.resize(size)

    def __len__(self):
        return len(self.states)

    def resize(self, size):
        """Reallocate zeroed states if `size` differs from the current size."""
        size = max(0, int(size))
        if size != len(self.states):
            self.states = [PeakState() for _ in range(size)]

    def update(self, index, value, now_ms, elapsed_ms, decay_ms):
        """
        Raise the held peak if `value` exceeds it, then apply decay.

        The decay is subtracted on every call, including the one that
        registered a rise.
        """
        state = self.states[index]
        value = _clamp(value)
        if value > state.value:
            state.value = value
            state.set_at = now_ms

        if decay_ms <= 0:
            state.value = 0.0
            return state.value

        elapsed_ms = max(0.0, elapsed_ms) if math.isfinite(elapsed_ms) else 0.0
        state.value = max(0.0, state.value - MAX_VALUE * elapsed_ms / decay_ms)
        return state.value

    def value_of(self, index):
        return self.states[index].value

    def opacity_of(self, index, now_ms, decay_ms):
        """Fade of the peak indicator: 1 right after a rise, 0 after `decay_ms`."""
        state = self.states[index]
        if decay_ms <= 0 or state.value <= 0:
            return 0.0
        age = now_ms - state.set_at
        return 1 - min(max(age, 0.0) / decay_ms, 1.0)


def _clamp(value):
    if not math.isfinite(value):
        return 0.0
    return min(max(float(value), 0.0), MAX_VALUE)
