"""
Fin block: the tile between the inner and outer offsets over one
sub-segment of an edge.
"""
from dataclasses import dataclass
from typing import List

from geometry_primitives import Point


@dataclass(frozen=True)
class Block:
    """A five-point tile straddling one edge sub-segment.

    Boundary order: sub_point, inner_start, inner_end, outer_end,
    outer_start. Start/end follow the edge direction.
    """
    angle: float
    sub_point: Point
    inner_start: Point
    inner_end: Point
    outer_end: Point
    outer_start: Point

    @property
    def outer_points(self) -> List[Point]:
        """Outer side, in edge direction."""
        return [self.outer_start, self.outer_end]

    @property
    def inner_points(self) -> List[Point]:
        """Inner side, against edge direction so it closes the outer side."""
        return [self.inner_end, self.inner_start]

    @property
    def points(self) -> List[Point]:
        return [
            self.sub_point,
            self.inner_start,
            self.inner_end,
            self.outer_end,
            self.outer_start,
        ]
