import numpy as np

from audiovis.constants import CURVE_SEGMENTS


def pol2cart(rho, phi, center):
    """Polar to cartesian around `center`, in surface coordinates."""
    return (rho * np.cos(phi) + center[0], rho * np.sin(phi) + center[1])


def quadratic_curve(start, control, end, segments=CURVE_SEGMENTS):
    """Flatten a quadratic Bezier curve; the start point is not included."""
    t = np.linspace(0, 1, segments + 1)[1:, None]
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (start, control, end))
    points = (1 - t) ** 2 * p0 + 2 * (1 - t) * t * p1 + t ** 2 * p2
    return [tuple(p) for p in points]


def rounded_top_bar(x, top, width, bottom, radius):
    """Outline of a bar anchored at `bottom` whose two top corners are rounded."""
    # Flat bars shorter than the corner radius keep their height
    radius = min(radius, max(bottom - top, 0), width / 2)
    points = [(x, bottom), (x, top + radius)]
    points += quadratic_curve((x, top + radius), (x, top), (x + radius, top))
    points.append((x + width - radius, top))
    points += quadratic_curve(
        (x + width - radius, top), (x + width, top), (x + width, top + radius)
    )
    points.append((x + width, bottom))
    return points
