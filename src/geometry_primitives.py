"""
Core geometry types and point helpers for panel decomposition.

Points are plain (x, y) float tuples. Built on NumPy for rotation and on
Shapely for converting point loops to polygons (area, validity).
"""
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

Point = Tuple[float, float]
Loop = List[Point]


# ─── Error types ─────────────────────────────────────────────────────────────

class WrenGeometryError(ValueError):
    """Base class for impossible or rejected panel geometry."""


class InvalidPolygonError(WrenGeometryError):
    """Input outline is not a usable simple polygon."""


class DegenerateEdgeError(WrenGeometryError):
    """An edge is too short to carry any sub-points."""


class OffsetError(WrenGeometryError):
    """The polygon offsetter produced an unusable ring."""


class OrientationError(WrenGeometryError):
    """Winding or offset sign does not match the expected convention."""


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box of a point set."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float


# ─── Point utilities ─────────────────────────────────────────────────────────

def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def angle(a: Point, b: Point) -> float:
    """Direction from a to b in radians."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def point_on_line(t: float) -> Callable[[Point, Point], Point]:
    """Return a function giving the point at distance t from a toward b."""
    def on_line(a: Point, b: Point) -> Point:
        length = distance(a, b)
        if length == 0:
            return (float(a[0]), float(a[1]))
        ratio = t / length
        return (a[0] + (b[0] - a[0]) * ratio, a[1] + (b[1] - a[1]) * ratio)
    return on_line


def rotate_around_point(center: Point, theta: float) -> Callable[[Point], Point]:
    """Return a function rotating a point counter-clockwise by theta about center."""
    c, s = math.cos(theta), math.sin(theta)
    rot = np.array([[c, -s], [s, c]])
    origin = np.asarray(center, dtype=np.float64)

    def rotate(p: Point) -> Point:
        x, y = rot @ (np.asarray(p, dtype=np.float64) - origin) + origin
        return (float(x), float(y))
    return rotate


def bounds(points: Sequence[Point]) -> Bounds:
    if not points:
        raise ValueError("Cannot compute bounds of an empty point set")
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return Bounds(min(xs), min(ys), max(xs), max(ys))


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area: positive for counter-clockwise loops."""
    area = 0.0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        area += points[i][0] * points[j][1] - points[j][0] * points[i][1]
    return area / 2.0


# ─── Conversion functions ────────────────────────────────────────────────────

def loop_to_polygon(points: Sequence[Point]) -> Polygon:
    """Convert a point loop to a Shapely Polygon (empty if < 3 points)."""
    if len(points) < 3:
        return Polygon()
    return Polygon(points)

