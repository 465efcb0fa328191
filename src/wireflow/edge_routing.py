"""
Local obstacle-avoiding orthogonal edge routing.

Implements the pieces the router stitches together for each edge:
- Port extension, with adjustment past a blocking obstacle
- Local detours around the union box of nearby obstacles
- A middle connector joining the source and target halves
- A collision detector for the segments nearest each endpoint

Only devices near a port are considered. Paths are not guaranteed to be
collision-free over their full length; the middle of a long cable may cross
unrelated geometry.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .config import RoutingConfig
from .geometry import manhattan_length, path_hits_any, segment_intersects_obstacle
from .models import Obstacle, Point, PortSide, ResolvedPort


@dataclass(frozen=True)
class SegmentCollision:
    """A protected path segment that passes through an obstacle."""

    segment_index: int
    obstacle: Obstacle


@dataclass
class DetourChoice:
    """
    Outcome of routing around obstacles near one port.

    Attributes:
        name: Which shape was chosen ("turn", "above", "below", "right", "left").
        interior: Waypoints strictly between the extension point and the aim.
        collided: True if the chosen candidate still hits a local obstacle.
    """

    name: str
    interior: List[Point] = field(default_factory=list)
    collided: bool = False


def compute_extension(
    port: ResolvedPort, obstacles: Sequence[Obstacle], config: RoutingConfig
) -> Point:
    """
    Point where a cable makes its first turn after leaving a port.

    The point lies ``extension_length`` away from the port in the side's
    outward direction. If the straight run to it crosses an obstacle, it is
    pushed beyond the far edge of the first obstacle hit plus ``clearance``.
    Only that first obstacle is considered.
    """
    dx, dy = port.side.direction
    extension = (
        port.x + dx * config.extension_length,
        port.y + dy * config.extension_length,
    )

    for obstacle in obstacles:
        if segment_intersects_obstacle(port.point, extension, obstacle):
            return _beyond_far_edge(port, obstacle, config.clearance)

    return extension


def _beyond_far_edge(
    port: ResolvedPort, obstacle: Obstacle, clearance: float
) -> Point:
    side = port.side
    if side == PortSide.EAST:
        return (obstacle.x2 + clearance, port.y)
    if side == PortSide.WEST:
        return (obstacle.x - clearance, port.y)
    if side == PortSide.SOUTH:
        return (port.x, obstacle.y2 + clearance)
    return (port.x, obstacle.y - clearance)


def detect_local_collisions(
    waypoints: Sequence[Point],
    obstacles: Sequence[Obstacle],
    protected_count: int,
) -> List[SegmentCollision]:
    """
    Check the segments nearest each end of a path.

    Only the first and last ``protected_count`` segments are tested; middle
    segments of long paths are never checked. At most one collision (the
    first obstacle hit) is reported per segment.
    """
    segment_count = len(waypoints) - 1
    if segment_count <= 0 or protected_count <= 0:
        return []

    head = range(min(protected_count, segment_count))
    tail = range(max(segment_count - protected_count, 0), segment_count)
    protected = sorted(set(head) | set(tail))

    collisions: List[SegmentCollision] = []
    for index in protected:
        p1, p2 = waypoints[index], waypoints[index + 1]
        for obstacle in obstacles:
            if segment_intersects_obstacle(p1, p2, obstacle):
                collisions.append(SegmentCollision(index, obstacle))
                break
    return collisions


def _union_box(obstacles: Sequence[Obstacle]) -> Tuple[float, float, float, float]:
    return (
        min(o.x for o in obstacles),
        min(o.y for o in obstacles),
        max(o.x2 for o in obstacles),
        max(o.y2 for o in obstacles),
    )


def _detour_candidates(
    start: Point,
    side: PortSide,
    obstacles: Sequence[Obstacle],
    aim: Point,
    clearance: float,
) -> List[Tuple[str, List[Point]]]:
    """Two fixed-shape 5-point detours, in preference order."""
    min_x, min_y, max_x, max_y = _union_box(obstacles)
    sx, sy = start
    ax, ay = aim

    if side.is_horizontal:
        past_x = max_x + clearance if side == PortSide.EAST else min_x - clearance
        above_y = min_y - clearance
        below_y = max_y + clearance
        return [
            ("above", [start, (sx, above_y), (past_x, above_y), (past_x, ay), aim]),
            ("below", [start, (sx, below_y), (past_x, below_y), (past_x, ay), aim]),
        ]

    past_y = max_y + clearance if side == PortSide.SOUTH else min_y - clearance
    right_x = max_x + clearance
    left_x = min_x - clearance
    return [
        ("right", [start, (right_x, sy), (right_x, past_y), (ax, past_y), aim]),
        ("left", [start, (left_x, sy), (left_x, past_y), (ax, past_y), aim]),
    ]


def choose_detour(
    start: Point,
    side: PortSide,
    obstacles: Sequence[Obstacle],
    aim: Point,
    clearance: float,
) -> DetourChoice:
    """
    Route from an extension point toward an aim point around local obstacles.

    Without obstacles a single right-angle turn is made toward the aim.
    Otherwise the first collision-free candidate wins; if every candidate
    collides, the one with the smaller Manhattan length is used.

    Args:
        start: Adjusted extension point of the port.
        side: Side of the port being routed away from.
        obstacles: Obstacles near the port.
        aim: Adjusted extension point at the other end of the edge.
        clearance: Offset kept from the union box of the obstacles.

    Returns:
        DetourChoice describing the chosen shape.
    """
    if not obstacles:
        if side.is_horizontal:
            turn = (start[0], aim[1])
        else:
            turn = (aim[0], start[1])
        return DetourChoice(name="turn", interior=[turn])

    candidates = _detour_candidates(start, side, obstacles, aim, clearance)

    for name, points in candidates:
        if not path_hits_any(points, obstacles):
            return DetourChoice(name=name, interior=points[1:-1])

    # min() keeps the first candidate on a tie, preserving preference order
    name, points = min(candidates, key=lambda c: manhattan_length(c[1]))
    return DetourChoice(name=name, interior=points[1:-1], collided=True)


def route_local_detour(
    start: Point,
    side: PortSide,
    obstacles: Sequence[Obstacle],
    aim: Point,
    clearance: float,
) -> List[Point]:
    """Interior waypoints of the detour chosen by ``choose_detour``."""
    return choose_detour(start, side, obstacles, aim, clearance).interior


def connect_middle(
    source_last: Point, target_last: Point, source_side: PortSide
) -> List[Point]:
    """
    Jog joining the source and target halves of a route.

    The jog crosses at the midpoint of the axis the source half leaves
    along: x for EAST/WEST sources, y for NORTH/SOUTH. It is not collision
    checked.
    """
    (ax, ay), (bx, by) = source_last, target_last
    if source_side.is_horizontal:
        mid_x = (ax + bx) / 2
        return [(mid_x, ay), (mid_x, by)]
    mid_y = (ay + by) / 2
    return [(ax, mid_y), (bx, mid_y)]
