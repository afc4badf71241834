"""
Wren panel decomposition.

Takes a simple polygon outline and derives everything needed to fabricate
the panel: inner/outer fin offsets, evenly spaced sub-points along every
edge, the block tiling between the offsets, corner joints at each vertex,
and the reinforcer, fin-piece and wall outlines aggregated from those tiles.

All work happens once in the constructor; a Wren is read-only afterwards.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from shapely.geometry import Polygon

from block import Block
from corner import Corner
from geometry_primitives import (
    DegenerateEdgeError,
    InvalidPolygonError,
    Loop,
    OffsetError,
    OrientationError,
    Point,
    angle,
    bounds,
    distance,
    loop_to_polygon,
    point_on_line,
    rotate_around_point,
    signed_area,
)
from list_utils import loopify_in_pairs, safe_index
from polygon_offset import DEFAULT_MITRE_LIMIT, align_to, offset
from wall import Wall

logger = logging.getLogger(__name__)


@dataclass
class WrenConfig:
    """Fabrication dimensions for a Wren panel (model units, usually mm)."""
    point_distance: float = 15.0   # sub-point spacing unit
    fin_width: float = 12.5        # half-width of the fin either side of an edge
    wall_distance: float = 120.0   # perimeter wall offset
    mitre_limit: float = DEFAULT_MITRE_LIMIT
    allow_short_edges: bool = True  # False: reject edges with no sub-points

    def __post_init__(self):
        for name in ("point_distance", "fin_width", "wall_distance", "mitre_limit"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @property
    def min_edge_length(self) -> float:
        """Edges must be longer than this to get any sub-points."""
        return 2 * self.point_distance


@dataclass
class Line:
    """Decomposition of one polygon edge, start -> end."""
    start: Point
    end: Point
    angle: float
    length: float
    sub_points: List[Point] = field(default_factory=list)
    inner_sub_points: List[Point] = field(default_factory=list)
    outer_sub_points: List[Point] = field(default_factory=list)
    blocks: List[Block] = field(default_factory=list)
    corner: Optional[Corner] = None
    midpoint_outer: Optional[Point] = None
    midpoint_inner: Optional[Point] = None

    @property
    def is_degenerate(self) -> bool:
        return not self.sub_points

    def head_joint(self) -> Tuple[Point, Point]:
        """(outer, inner) where the previous corner meets this edge."""
        if self.is_degenerate:
            return self.midpoint_outer, self.midpoint_inner
        return self.outer_sub_points[0], self.inner_sub_points[0]

    def tail_joint(self) -> Tuple[Point, Point]:
        """(outer, inner) where this edge meets its own corner."""
        if self.is_degenerate:
            return self.midpoint_outer, self.midpoint_inner
        return self.outer_sub_points[-1], self.inner_sub_points[-1]


# ─── Input validation ────────────────────────────────────────────────────────

def validate_polygon(
    points: Sequence[Sequence[float]],
    config: Optional[WrenConfig] = None,
) -> List[Point]:
    """Check an outline and return it as a list of float tuples.

    A single explicit closing point (last == first) is dropped.

    Raises:
        InvalidPolygonError: too few points, non-finite or coincident
            points, zero area, a self-intersecting outline, or features
            that vanish in the fin offset.
        DegenerateEdgeError: an edge too short for sub-points, when the
            config disallows short edges.
        OffsetError: the inner fin offset collapses or splits.
    """
    if config is None:
        config = WrenConfig()

    try:
        pts = [(float(p[0]), float(p[1])) for p in points]
    except (TypeError, ValueError, IndexError) as exc:
        raise InvalidPolygonError(f"Points must be (x, y) pairs: {exc}") from exc

    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    if len(pts) < 3:
        raise InvalidPolygonError(f"Polygon needs at least 3 points, got {len(pts)}")
    if not all(math.isfinite(c) for p in pts for c in p):
        raise InvalidPolygonError("Polygon has non-finite coordinates")

    for i, (start, end) in enumerate(loopify_in_pairs(pts)):
        if start == end:
            raise InvalidPolygonError(f"Edge {i} has zero length at {start}")

    if abs(signed_area(pts)) == 0:
        raise InvalidPolygonError("Polygon has zero area")
    if not Polygon(pts).is_valid:
        raise InvalidPolygonError("Polygon is self-intersecting")

    if not config.allow_short_edges:
        for i, (start, end) in enumerate(loopify_in_pairs(pts)):
            length = distance(start, end)
            if length / 2 <= config.point_distance:
                raise DegenerateEdgeError(
                    f"Edge {i} is {length:.2f} long; needs more than "
                    f"{config.min_edge_length:.2f} for sub-points"
                )

    fin_offsets(pts, offset(pts, 0), config)
    return pts


def fin_offsets(
    raw: List[Point],
    working: List[Point],
    config: WrenConfig,
) -> Tuple[List[Point], List[Point]]:
    """Outer and inner fin offsets of `raw`, index-aligned with `working`.

    Raises:
        InvalidPolygonError: an outline feature disappears in the offset,
            e.g. a notch narrower than twice the fin width.
    """
    fin = config.fin_width
    outer = offset(raw, fin, config.mitre_limit)
    inner = offset(raw, -fin, config.mitre_limit)
    try:
        return align_to(outer, working, fin), align_to(inner, working, -fin)
    except OffsetError as exc:
        raise InvalidPolygonError(
            f"Outline features are lost at fin width {fin}: {exc}"
        ) from exc


# ─── Decomposition engine ────────────────────────────────────────────────────

class Wren:
    """Block/corner decomposition of a panel outline.

    Attributes:
        points: Outline, normalized to counter-clockwise winding.
        normalized_points: Outline moved to a top-left-origin display frame.
        outer_points / inner_points: Fin offsets, aligned so index i is the
            offset of points[i].
        lines: One Line per edge; lines[i] runs points[i] -> points[i + 1].
        reinforcers: One closed loop per vertex.
        fin_pieces: One closed loop per edge (empty for degraded edges).
        outer_walls / inner_walls: One rectangle per offset edge.
    """

    def __init__(self, points: Sequence[Sequence[float]], config: Optional[WrenConfig] = None):
        self.config = config or WrenConfig()
        raw = validate_polygon(points, self.config)

        # offset with 0 to normalize direction of points
        self.points: List[Point] = offset(raw, 0)
        self.normalized_points: List[Point] = self._normalize_for_display(raw)

        self.outer_points, self.inner_points = fin_offsets(raw, self.points, self.config)
        self._check_orientation()

        self.lines: List[Line] = self.calculate_lines(self.points)
        self.calculate_corners()

        self.reinforcers: List[Loop] = self.calculate_reinforcers()
        self.fin_pieces: List[Loop] = self.calculate_fin_pieces()
        self.inner_walls: List[Loop] = self.calculate_walls(
            self.inner_points, -self.config.wall_distance
        )
        self.outer_walls: List[Loop] = self.calculate_walls(
            self.outer_points, self.config.wall_distance
        )

        logger.info(
            "Wren: %d edges, %d blocks, %d reinforcers, %d fin pieces",
            len(self.lines), len(self.blocks),
            len(self.reinforcers), len(self.fin_pieces),
        )

    # ── Setup ────────────────────────────────────────────────────────────

    def _normalize_for_display(self, raw: List[Point]) -> List[Point]:
        """Shift x to start at 0 and flip y for a top-left origin."""
        box = bounds(raw)
        return [(x - box.min_x, box.max_y - y) for x, y in self.points]

    def _check_orientation(self):
        if signed_area(self.points) <= 0:
            raise OrientationError("Normalized outline is not counter-clockwise")
        outer_area = loop_to_polygon(self.outer_points).area
        inner_area = loop_to_polygon(self.inner_points).area
        area = loop_to_polygon(self.points).area
        if not outer_area > area > inner_area:
            raise OrientationError(
                f"Offset areas out of order: outer={outer_area:.2f}, "
                f"outline={area:.2f}, inner={inner_area:.2f}"
            )

    # ── Edge decomposition ───────────────────────────────────────────────

    def calculate_lines(self, points: List[Point]) -> List[Line]:
        return [self._calculate_line(start, end) for start, end in loopify_in_pairs(points)]

    def _calculate_line(self, start: Point, end: Point) -> Line:
        line_angle = angle(start, end)
        length = distance(start, end)
        half_length = length / 2
        step = self.config.point_distance
        fin = self.config.fin_width

        # 1. Sub-points, walking in from both ends toward the middle
        first_half: List[Point] = []
        last_half: List[Point] = []
        t = step
        while t < half_length:
            first_half.append(point_on_line(t)(start, end))
            last_half.append(point_on_line(t)(end, start))
            t += step * 2
        sub_points = first_half + last_half[::-1]

        # 2. Inner & outer sub-points: offset in edge-local space, rotate onto the edge
        inner_sub_points: List[Point] = []
        outer_sub_points: List[Point] = []
        for x, y in sub_points:
            rotate = rotate_around_point((x, y), line_angle)
            inner_sub_points.append(rotate((x, y + fin)))
            outer_sub_points.append(rotate((x, y - fin)))

        # 3. Blocks between consecutive sub-points
        blocks = [
            Block(
                line_angle,
                sub_points[i],
                inner_sub_points[i],
                inner_sub_points[i + 1],
                outer_sub_points[i + 1],
                outer_sub_points[i],
            )
            for i in range(len(sub_points) - 1)
        ]

        line = Line(
            start=start,
            end=end,
            angle=line_angle,
            length=length,
            sub_points=sub_points,
            inner_sub_points=inner_sub_points,
            outer_sub_points=outer_sub_points,
            blocks=blocks,
        )
        if line.is_degenerate:
            mid = point_on_line(half_length)(start, end)
            rotate = rotate_around_point(mid, line_angle)
            line.midpoint_outer = rotate((mid[0], mid[1] - fin))
            line.midpoint_inner = rotate((mid[0], mid[1] + fin))
            logger.warning(
                "Edge %s -> %s is %.2f long; no sub-points or blocks generated",
                start, end, length,
            )
        return line

    # ── Vertex joints and aggregates ─────────────────────────────────────

    def calculate_corners(self):
        index = safe_index(len(self.lines))
        for i, prev_line in enumerate(self.lines):
            next_i = index(i + 1)
            next_line = self.lines[next_i]
            prev_outer, prev_inner = prev_line.tail_joint()
            next_outer, next_inner = next_line.head_joint()
            prev_line.corner = Corner(
                prev_outer,
                self.outer_points[next_i],
                next_outer,
                next_inner,
                self.inner_points[next_i],
                prev_inner,
            )

    def calculate_reinforcers(self) -> List[Loop]:
        index = safe_index(len(self.lines))
        reinforcers = []
        for i, prev_line in enumerate(self.lines):
            next_line = self.lines[index(i + 1)]
            tiles = prev_line.blocks[-2:] + [prev_line.corner] + next_line.blocks[:2]
            reinforcers.append(_ring(tiles))
        return reinforcers

    def calculate_fin_pieces(self) -> List[Loop]:
        return [_ring(line.blocks) for line in self.lines]

    def calculate_walls(self, points: List[Point], wall_distance: float) -> List[Loop]:
        index = safe_index(len(points))
        return [
            Wall(
                wall_distance,
                points[i],
                self.lines[i].angle,
                (points[i], points[index(i + 1)]),
            ).points
            for i in range(len(points))
        ]

    # ── Read-only views ──────────────────────────────────────────────────

    @property
    def sub_points(self) -> List[Point]:
        """Every edge's sub-points, in edge order (preview markers)."""
        return [p for line in self.lines for p in line.sub_points]

    @property
    def blocks(self) -> List[Block]:
        return [b for line in self.lines for b in line.blocks]

    @property
    def corners(self) -> List[Corner]:
        return [line.corner for line in self.lines]

    def validate_geometry(self) -> List[str]:
        """Check the generated outlines.

        Returns list of warning strings (empty = ok).
        """
        issues = []
        for i, line in enumerate(self.lines):
            if line.is_degenerate:
                issues.append(f"Edge {i} is too short for blocks ({line.length:.2f})")
        for i, loop in enumerate(self.reinforcers):
            if not loop_to_polygon(loop).is_valid:
                issues.append(f"Reinforcer {i} is not a valid polygon")
        for i, loop in enumerate(self.fin_pieces):
            if loop and not loop_to_polygon(loop).is_valid:
                issues.append(f"Fin piece {i} is not a valid polygon")
        return issues

    def to_dict(self) -> Dict:
        """JSON-serialisable snapshot of the decomposition."""
        def pts(seq):
            return [list(p) for p in seq]

        def tile(t):
            return {"outer_points": pts(t.outer_points), "inner_points": pts(t.inner_points)}

        return {
            "points": pts(self.points),
            "normalized_points": pts(self.normalized_points),
            "outer_points": pts(self.outer_points),
            "inner_points": pts(self.inner_points),
            "lines": [
                {
                    "angle": line.angle,
                    "length": line.length,
                    "sub_points": pts(line.sub_points),
                    "inner_sub_points": pts(line.inner_sub_points),
                    "outer_sub_points": pts(line.outer_sub_points),
                    "blocks": [tile(b) for b in line.blocks],
                    "corner": tile(line.corner),
                }
                for line in self.lines
            ],
            "reinforcers": [pts(loop) for loop in self.reinforcers],
            "fin_pieces": [pts(loop) for loop in self.fin_pieces],
            "outer_walls": [pts(loop) for loop in self.outer_walls],
            "inner_walls": [pts(loop) for loop in self.inner_walls],
        }


def _ring(tiles) -> Loop:
    """Outer points in tile order, then inner points in reverse tile order."""
    outer = [p for t in tiles for p in t.outer_points]
    inner = [p for t in reversed(tiles) for p in t.inner_points]
    return outer + inner
