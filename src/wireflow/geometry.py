"""
Geometric predicates for orthogonal routing.

Every segment the router produces is axis-aligned, so a segment's bounding
box is its exact footprint and a bounding-box overlap test is an exact
collision test.
"""

import math
from typing import List, Sequence

from .models import Obstacle, Point


def segment_intersects_obstacle(p1: Point, p2: Point, obstacle: Obstacle) -> bool:
    """
    Check if the segment p1-p2 passes through an obstacle.

    Touching the obstacle border is not a collision, and a zero-size
    obstacle never collides.
    """
    if obstacle.width <= 0 or obstacle.height <= 0:
        return False

    min_x, max_x = min(p1[0], p2[0]), max(p1[0], p2[0])
    min_y, max_y = min(p1[1], p2[1]), max(p1[1], p2[1])

    return (
        max_x > obstacle.x
        and min_x < obstacle.x2
        and max_y > obstacle.y
        and min_y < obstacle.y2
    )


def path_hits_any(points: Sequence[Point], obstacles: Sequence[Obstacle]) -> bool:
    """Check every segment of a polyline against every obstacle."""
    for p1, p2 in zip(points, points[1:]):
        for obstacle in obstacles:
            if segment_intersects_obstacle(p1, p2, obstacle):
                return True
    return False


def manhattan_length(points: Sequence[Point]) -> float:
    """Sum of axis-aligned segment lengths along a polyline."""
    return sum(
        abs(x2 - x1) + abs(y2 - y1) for (x1, y1), (x2, y2) in zip(points, points[1:])
    )


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def is_orthogonal(points: Sequence[Point]) -> bool:
    """True if every consecutive pair differs along exactly one axis."""
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        if (x1 == x2) == (y1 == y2):
            return False
    return True


def drop_repeated_points(points: Sequence[Point]) -> List[Point]:
    """Remove consecutive duplicates, which would form zero-length segments."""
    result: List[Point] = []
    for point in points:
        if not result or result[-1] != point:
            result.append(point)
    return result
