"""
Polygon offsetting for fin and wall outlines.

Uses Shapely's mitred buffer so straight edges stay straight and every
vertex maps to exactly one offset vertex. A zero delta only normalizes the
winding to counter-clockwise.
"""
import logging
from typing import List, Sequence

import numpy as np
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.polygon import orient

from geometry_primitives import OffsetError, Point

logger = logging.getLogger(__name__)

DEFAULT_MITRE_LIMIT = 10.0


def offset(
    points: Sequence[Point],
    delta: float,
    mitre_limit: float = DEFAULT_MITRE_LIMIT,
) -> List[Point]:
    """Grow (delta > 0) or shrink (delta < 0) a closed polygon.

    Args:
        points: Polygon vertices, any winding, closing point optional.
        delta: Signed offset distance. 0 normalizes winding only.
        mitre_limit: Corners sharper than this ratio get bevelled.

    Returns:
        Counter-clockwise vertex list without the closing point.

    Raises:
        OffsetError: If the polygon collapses or splits.
    """
    polygon = Polygon(points)
    if delta:
        polygon = polygon.buffer(delta, join_style="mitre", mitre_limit=mitre_limit)

    if polygon.is_empty:
        raise OffsetError(f"Offset by {delta} collapsed the polygon")
    if isinstance(polygon, MultiPolygon):
        raise OffsetError(
            f"Offset by {delta} split the polygon into {len(polygon.geoms)} parts"
        )

    polygon = orient(polygon, sign=1.0)
    result = [(float(x), float(y)) for x, y in polygon.exterior.coords[:-1]]
    if delta:
        # buffer noding can leave vertices in the middle of straight runs
        result = _drop_collinear(result)
    logger.debug("Offset %d vertices by %.3f -> %d vertices", len(points), delta, len(result))
    return result


def _corner_mask(points: Sequence[Point], tolerance: float = 1e-9) -> np.ndarray:
    """True for vertices that turn, False for those in the middle of a straight run."""
    ring = np.asarray(points, dtype=np.float64)
    v1 = ring - np.roll(ring, 1, axis=0)
    v2 = np.roll(ring, -1, axis=0) - ring
    cross = v1[:, 0] * v2[:, 1] - v1[:, 1] * v2[:, 0]
    scale = np.linalg.norm(v1, axis=1) * np.linalg.norm(v2, axis=1)
    return np.abs(cross) > tolerance * np.maximum(scale, 1.0)


def _drop_collinear(points: List[Point]) -> List[Point]:
    if len(points) < 4:
        return points
    return [p for p, k in zip(points, _corner_mask(points)) if k]


def _rotate_to(points: Sequence[Point], reference: Sequence[Point]) -> List[Point]:
    """Cyclic shift of points with the smallest summed distance to reference."""
    ring = np.asarray(points, dtype=np.float64)
    ref = np.asarray(reference, dtype=np.float64)
    costs = [
        float(np.linalg.norm(np.roll(ring, -shift, axis=0) - ref, axis=1).sum())
        for shift in range(len(ring))
    ]
    best = int(np.argmin(costs))
    return [tuple(map(float, p)) for p in np.roll(ring, -best, axis=0)]


def _displace(reference: Sequence[Point], i: int, delta: float) -> Point:
    """Move a straight-run vertex along the run's right normal by delta."""
    n = len(reference)
    (x0, y0), (x1, y1) = reference[i - 1], reference[(i + 1) % n]
    dx, dy = x1 - x0, y1 - y0
    length = float(np.hypot(dx, dy))
    x, y = reference[i]
    return (x + delta * dy / length, y - delta * dx / length)


def align_to(
    points: Sequence[Point],
    reference: Sequence[Point],
    delta: float = 0.0,
) -> List[Point]:
    """Re-index an offset ring so points[i] is the offset of reference[i].

    Both rings are counter-clockwise. Reference vertices in the middle of a
    straight run have no vertex on a mitred offset; when `delta` is given,
    their counterpart is placed `delta` along the run's outward normal.

    Raises:
        OffsetError: If the vertex counts cannot be matched up.
    """
    if delta and len(points) < len(reference):
        corners = _corner_mask(reference)
        if len(points) == int(corners.sum()):
            anchored = iter(_rotate_to(points, [p for p, c in zip(reference, corners) if c]))
            return [
                next(anchored) if c else _displace(reference, i, delta)
                for i, c in enumerate(corners)
            ]

    if len(points) != len(reference):
        raise OffsetError(
            f"Offset ring has {len(points)} vertices, expected {len(reference)}"
        )
    return _rotate_to(points, reference)
