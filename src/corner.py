"""
Corner joint: bridges the last block of one edge and the first block of
the next around their shared vertex.
"""
from dataclasses import dataclass
from typing import List

from geometry_primitives import Point


@dataclass(frozen=True)
class Corner:
    """Six-point joint tile.

    Outer points run prev edge -> offset vertex -> next edge; inner points
    run back the other way, so outer + inner traces a closed ring.
    """
    prev_outer: Point
    outer_vertex: Point
    next_outer: Point
    next_inner: Point
    inner_vertex: Point
    prev_inner: Point

    @property
    def outer_points(self) -> List[Point]:
        return [self.prev_outer, self.outer_vertex, self.next_outer]

    @property
    def inner_points(self) -> List[Point]:
        return [self.next_inner, self.inner_vertex, self.prev_inner]

    @property
    def points(self) -> List[Point]:
        return self.outer_points + self.inner_points
