"""
Drawable targets for the renderers.

Renderers only ever issue primitive operations (paths, circles, clears) with a
paint descriptor from `audiovis.colors`. `OpenCVSurface` rasterises them onto a
BGR frame; `RecordingSurface` just remembers them.
"""

from typing import NamedTuple, Optional, Tuple

import cv2
import numpy as np

from audiovis.colors import LinearGradient, to_rgba
from audiovis.constants import BACKGROUND_COLOR

# Fixed-point bits used for sub-pixel coordinates in OpenCV calls
SHIFT = 4
SCALE = 1 << SHIFT


class Surface:
    """Fixed-size 2D target with an immediate drawing API."""

    def __init__(self, width, height):
        self.width = width
        self.height = height

    def clear(self):
        raise NotImplementedError

    def fill_path(self, points, paint):
        raise NotImplementedError

    def stroke_path(self, points, paint, line_width=1, closed=False):
        raise NotImplementedError

    def fill_circle(self, center, radius, paint):
        raise NotImplementedError

    def stroke_circle(self, center, radius, paint, line_width=1):
        raise NotImplementedError


class DrawOp(NamedTuple):
    kind: str
    paint: object = None
    points: Tuple = ()
    center: Optional[Tuple[float, float]] = None
    radius: float = 0.0
    line_width: float = 0.0
    closed: bool = False


class RecordingSurface(Surface):
    """Surface that records the operations issued to it."""

    def __init__(self, width, height):
        super().__init__(width, height)
        self.ops = []

    def of_kind(self, kind):
        return [op for op in self.ops if op.kind == kind]

    def clear(self):
        self.ops.append(DrawOp("clear"))

    def fill_path(self, points, paint):
        self.ops.append(DrawOp("fill_path", paint, tuple(points)))

    def stroke_path(self, points, paint, line_width=1, closed=False):
        self.ops.append(
            DrawOp("stroke_path", paint, tuple(points), line_width=line_width, closed=closed)
        )

    def fill_circle(self, center, radius, paint):
        self.ops.append(DrawOp("fill_circle", paint, center=tuple(center), radius=radius))

    def stroke_circle(self, center, radius, paint, line_width=1):
        self.ops.append(
            DrawOp(
                "stroke_circle",
                paint,
                center=tuple(center),
                radius=radius,
                line_width=line_width,
            )
        )


class OpenCVSurface(Surface):
    """
    Rasterises primitives onto a BGR uint8 frame with OpenCV.

    Each primitive is drawn as an anti-aliased coverage mask over its bounding
    box, then the paint (flat colour or linear gradient) is alpha-blended
    through that mask.
    """

    def __init__(self, width, height, background=BACKGROUND_COLOR):
        super().__init__(width, height)
        self.background = background
        self.frame = np.full((height, width, 3), background, dtype=np.uint8)

    def clear(self):
        self.frame[:] = self.background

    def to_rgb(self):
        return cv2.cvtColor(self.frame, cv2.COLOR_BGR2RGB)

    def fill_path(self, points, paint):
        points = _as_points(points)
        # Zero-area outlines (e.g. silent bars) cover no pixels
        if len(points) < 3 or _area(points) < 1e-6:
            return
        box = self._bounding_box(points, 1)
        if box is None:
            return
        mask = _empty_mask(box)
        cv2.fillPoly(mask, [_fixed(points, box)], 255, cv2.LINE_AA, SHIFT)
        self._composite(mask, box, paint)

    def stroke_path(self, points, paint, line_width=1, closed=False):
        points = _as_points(points)
        if len(points) < 2:
            return
        box = self._bounding_box(points, line_width + 1)
        if box is None:
            return
        mask = _empty_mask(box)
        cv2.polylines(
            mask, [_fixed(points, box)], closed, 255, _thickness(line_width), cv2.LINE_AA, SHIFT
        )
        self._composite(mask, box, paint)

    def fill_circle(self, center, radius, paint):
        self._circle(center, radius, paint, cv2.FILLED)

    def stroke_circle(self, center, radius, paint, line_width=1):
        self._circle(center, radius, paint, _thickness(line_width))

    def _circle(self, center, radius, paint, thickness):
        if not np.isfinite(radius) or radius <= 0:
            return
        center = _as_points([center])
        if len(center) == 0:
            return
        pad = radius + max(thickness, 1) + 1
        box = self._bounding_box(np.vstack([center - pad, center + pad]), 0)
        if box is None:
            return
        mask = _empty_mask(box)
        cv2.circle(
            mask,
            tuple(int(v) for v in _fixed(center, box)[0]),
            int(round(radius * SCALE)),
            255,
            thickness,
            cv2.LINE_AA,
            SHIFT,
        )
        self._composite(mask, box, paint)

    def _bounding_box(self, points, pad):
        x0, y0 = np.floor(points.min(axis=0) - pad).astype(int)
        x1, y1 = np.ceil(points.max(axis=0) + pad).astype(int)
        x0, y0 = max(x0, 0), max(y0, 0)
        x1, y1 = min(x1, self.width), min(y1, self.height)
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1

    def _composite(self, mask, box, paint):
        x0, y0, x1, y1 = box
        color, alpha = _paint_layer(paint, box)
        coverage = (mask.astype(np.float32) / 255.0) * alpha
        coverage = coverage[..., None]
        region = self.frame[y0:y1, x0:x1].astype(np.float32)
        blended = region * (1 - coverage) + color * coverage
        self.frame[y0:y1, x0:x1] = np.clip(blended, 0, 255).astype(np.uint8)


def _as_points(points):
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return points[np.isfinite(points).all(axis=1)]


def _area(points):
    x, y = points[:, 0], points[:, 1]
    return abs(np.dot(x, np.roll(y, 1)) - np.dot(y, np.roll(x, 1))) / 2


def _fixed(points, box):
    offset = np.array(box[:2], dtype=np.float64)
    return np.round((points - offset) * SCALE).astype(np.int32)


def _empty_mask(box):
    x0, y0, x1, y1 = box
    return np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)


def _thickness(line_width):
    return max(1, int(round(line_width)))


def _paint_layer(paint, box):
    """Per-pixel BGR colour and alpha of `paint` over `box`."""
    if not isinstance(paint, LinearGradient):
        red, green, blue, alpha = to_rgba(paint)
        return np.array([blue, green, red], dtype=np.float32), alpha

    x0, y0, x1, y1 = box
    xs = np.arange(x0, x1, dtype=np.float32) + 0.5
    ys = np.arange(y0, y1, dtype=np.float32) + 0.5
    grid_x, grid_y = np.meshgrid(xs, ys)

    (sx, sy), (ex, ey) = paint.start, paint.end
    dx, dy = ex - sx, ey - sy
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        t = np.ones_like(grid_x)
    else:
        t = np.clip(((grid_x - sx) * dx + (grid_y - sy) * dy) / length_sq, 0, 1)

    offsets = [offset for offset, _ in paint.stops]
    rgba = np.array([to_rgba(color) for _, color in paint.stops], dtype=np.float32)
    channels = [np.interp(t, offsets, rgba[:, c]) for c in (2, 1, 0)]
    color = np.stack(channels, axis=-1).astype(np.float32)
    alpha = np.interp(t, offsets, rgba[:, 3]).astype(np.float32)
    return color, alpha
