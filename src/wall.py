"""
Perimeter wall strip along one offset edge.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from geometry_primitives import Point, distance, rotate_around_point


@dataclass(frozen=True)
class Wall:
    """Rectangular strip running along `segment`, anchored at `anchor`.

    The strip is `abs(offset_distance)` wide. Positive distances extend
    to the right of the segment direction (outward for a counter-clockwise
    outline), negative ones to the left.
    """
    offset_distance: float
    anchor: Point
    angle: float
    segment: Tuple[Point, Point]
    points: List[Point] = field(init=False)

    def __post_init__(self):
        # Build the rectangle along +x from the anchor, then rotate into place
        x, y = self.anchor
        length = distance(*self.segment)
        rotate = rotate_around_point(self.anchor, self.angle)
        local = [
            (x, y),
            (x + length, y),
            (x + length, y - self.offset_distance),
            (x, y - self.offset_distance),
        ]
        object.__setattr__(self, "points", [rotate(p) for p in local])

    @property
    def length(self) -> float:
        return distance(*self.segment)

    @property
    def width(self) -> float:
        return abs(self.offset_distance)
