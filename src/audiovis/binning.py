"""
Frequency binning shared by the bar and radial visualisers.

Only the lowest `SPECTRUM_CAP` samples are displayed. The first 20% of the
elements split the lowest 10% of that range linearly; the rest follow a
quadratic curve so high frequencies are compressed and lows get more room.
"""

import math
from typing import NamedTuple

import numpy as np

from audiovis.constants import (
    FILLER_BAND,
    LOW_ELEMENT_SHARE,
    LOW_SPECTRUM_SHARE,
    SPECTRUM_CAP,
)


class BinRange(NamedTuple):
    """Raw sample indices `[start, end)` aggregated into one element."""

    start: int
    end: int


def _boundary(i, element_count, cap):
    if i >= element_count:
        return cap
    low_count = math.ceil(element_count * LOW_ELEMENT_SHARE)
    low_span = cap * LOW_SPECTRUM_SHARE
    if i < low_count:
        return i / low_count * low_span
    position = (i - LOW_ELEMENT_SHARE * element_count) / (
        (1 - LOW_ELEMENT_SHARE) * element_count
    )
    return low_span + position ** 2 * (cap - low_span)


def bin_for(element_count, raw_length):
    """
    Return one `BinRange` per displayed element.

    Ranges never start before the previous one and always hold at least one
    sample. They only overlap when there are more elements than samples, in
    which case the tail collapses onto the last sample.
    """
    if element_count <= 0 or raw_length <= 0:
        return []

    cap = min(raw_length, SPECTRUM_CAP)
    ranges = []
    previous_end = 0
    for i in range(element_count):
        start = max(int(_boundary(i, element_count, cap)), previous_end)
        start = min(start, cap - 1)
        end = int(_boundary(i + 1, element_count, cap))
        end = min(max(end, start + 1), cap)
        ranges.append(BinRange(start, end))
        previous_end = end
    return ranges


def aggregate(frame, bin_range):
    """Mean magnitude over a range; indices past the frame are skipped."""
    samples = np.asarray(frame)[bin_range.start : bin_range.end]
    if samples.size == 0:
        return 0.0
    return float(samples.mean())


def aggregate_all(frame, element_count):
    """Aggregated value of every element, in element order."""
    return [aggregate(frame, r) for r in bin_for(element_count, len(frame))]


def filler_range(raw_length):
    """
    Fixed mid-spectrum band used for the radial seam filler.

    This band is independent of the binning curve above.
    """
    cap = min(raw_length, SPECTRUM_CAP)
    if cap <= 0:
        return BinRange(0, 0)
    start = min(int(cap * FILLER_BAND[0]), cap - 1)
    end = min(max(int(cap * FILLER_BAND[1]), start + 1), cap)
    return BinRange(start, end)
