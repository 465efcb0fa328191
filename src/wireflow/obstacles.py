"""
Obstacle index for local edge routing.

Device boxes (leaf nodes) become padded rectangles in absolute coordinates.
Containers never become obstacles: cables may cross group boundaries
freely. The index is a plain tuple, built once per render pass and passed
read-only into every routing call.
"""

from typing import Iterable, List, Sequence, Tuple

from .geometry import distance
from .models import Obstacle, Point, PositionedNode


def build_obstacles(root: PositionedNode, padding: float) -> Tuple[Obstacle, ...]:
    """
    Convert the box tree into one padded obstacle per device.

    The root itself is the drawing and never an obstacle. Devices with a
    zero or negative size are skipped.

    Args:
        root: Root of the positioned box tree.
        padding: Inflation applied on all four sides of each device box.

    Returns:
        Obstacles in depth-first document order.
    """
    obstacles: List[Obstacle] = []

    def visit(node: PositionedNode, offset_x: float, offset_y: float) -> None:
        abs_x = offset_x + node.x
        abs_y = offset_y + node.y
        if node.children:
            for child in node.children:
                visit(child, abs_x, abs_y)
            return
        if node.width <= 0 or node.height <= 0:
            return
        obstacles.append(
            Obstacle(
                id=node.id,
                x=abs_x - padding,
                y=abs_y - padding,
                width=node.width + 2 * padding,
                height=node.height + 2 * padding,
            )
        )

    for child in root.children:
        visit(child, root.x, root.y)

    return tuple(obstacles)


def filter_local_obstacles(
    center: Point,
    radius: float,
    obstacles: Sequence[Obstacle],
    excluded_ids: Iterable[str] = (),
) -> List[Obstacle]:
    """
    Keep obstacles whose center is strictly closer than ``radius`` to a point.

    Bounding the search keeps per-edge cost proportional to local density
    rather than to the size of the whole diagram.
    """
    excluded = set(excluded_ids)
    return [
        obstacle
        for obstacle in obstacles
        if obstacle.id not in excluded and distance(center, obstacle.center) < radius
    ]
