"""
PNG preview renderer for routed wiring diagrams.

Draws containers, devices, their obstacle rectangles and every routed cable
so routing decisions can be inspected visually. This is a debugging aid; it
is not the production presentation surface.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .coordinates import TreeIndex
from .models import LayoutGraph, Obstacle, Point, PositionedNode, RouteStrategy
from .router import RoutingResult

Box = Tuple[float, float, float, float]


class RoutePreview:
    """Renders a layout and its routes as a PNG image."""

    def __init__(
        self,
        scale: int = 2,
        margin: int = 40,
        show_obstacles: bool = True,
        show_labels: bool = True,
    ):
        self.scale = scale
        self.margin = margin
        self.show_obstacles = show_obstacles
        self.show_labels = show_labels
        self._origin: Point = (0, 0)

        # Colors
        self.bg_color = (255, 255, 255)
        self.container_fill = (247, 247, 247)
        self.container_outline = (153, 153, 153)
        self.device_fill = (221, 221, 221)
        self.device_outline = (0, 0, 0)
        self.obstacle_color = (230, 120, 120)
        self.text_color = (0, 0, 0)
        self.route_colors = {
            RouteStrategy.LAYOUT: (51, 51, 51),
            RouteStrategy.SYNTHESIZED: (74, 144, 226),
            RouteStrategy.DIRECT: (245, 166, 35),
        }

    def render(
        self,
        layout: LayoutGraph,
        result: RoutingResult,
        obstacles: Sequence[Obstacle] = (),
    ) -> Image.Image:
        """
        Draw the diagram.

        Args:
            layout: The box tree and edges that were routed.
            result: Routes produced by an EdgeRouter.
            obstacles: Obstacle index to outline, if ``show_obstacles`` is set.

        Returns:
            The rendered RGB image.
        """
        boxes = list(self._absolute_boxes(layout.root))
        points = [p for route in result.routes.values() for p in route.waypoints]
        if not self.show_obstacles:
            obstacles = ()

        min_x, min_y, max_x, max_y = _extent(
            [box for _, box, _ in boxes]
            + [(o.x, o.y, o.x2, o.y2) for o in obstacles],
            points,
        )
        self._origin = (min_x, min_y)

        width = int(math.ceil((max_x - min_x) * self.scale)) + 2 * self.margin
        height = int(math.ceil((max_y - min_y) * self.scale)) + 2 * self.margin
        img = Image.new("RGB", (max(width, 1), max(height, 1)), self.bg_color)
        draw = ImageDraw.Draw(img)
        font = ImageFont.load_default()

        # Containers first so devices and cables sit on top of them
        for node, box, is_container in boxes:
            if is_container:
                self._draw_box(
                    draw, box, self.container_fill, self.container_outline
                )
        for node, box, is_container in boxes:
            if not is_container:
                self._draw_box(draw, box, self.device_fill, self.device_outline)
            if self.show_labels and node.label:
                x, y = self._to_canvas((box[0], box[1]))
                draw.text((x + 4, y + 4), node.label, fill=self.text_color, font=font)

        for obstacle in obstacles:
            draw.rectangle(
                [
                    self._to_canvas((obstacle.x, obstacle.y)),
                    self._to_canvas((obstacle.x2, obstacle.y2)),
                ],
                outline=self.obstacle_color,
                width=1,
            )

        line_width = max(1, self.scale)
        for route in result.routes.values():
            color = self.route_colors[route.strategy]
            self._draw_route(draw, route.waypoints, color, line_width)

        return img

    def save(
        self,
        layout: LayoutGraph,
        result: RoutingResult,
        filename: str,
        obstacles: Sequence[Obstacle] = (),
    ) -> str:
        """Render and save to a PNG file, returning the filename."""
        self.render(layout, result, obstacles).save(filename, "PNG")
        return filename

    def _absolute_boxes(
        self, root: PositionedNode
    ) -> Iterable[Tuple[PositionedNode, Box, bool]]:
        index = TreeIndex(root)
        stack = list(reversed(root.children))
        while stack:
            node = stack.pop()
            x, y = index.absolute_offset(node.id)
            yield node, (x, y, x + node.width, y + node.height), node.is_container
            stack.extend(reversed(node.children))

    def _to_canvas(self, point: Point) -> Tuple[float, float]:
        ox, oy = self._origin
        return (
            (point[0] - ox) * self.scale + self.margin,
            (point[1] - oy) * self.scale + self.margin,
        )

    def _draw_box(self, draw: ImageDraw.ImageDraw, box: Box, fill, outline):
        x1, y1 = self._to_canvas((box[0], box[1]))
        x2, y2 = self._to_canvas((box[2], box[3]))
        draw.rectangle([x1, y1, x2, y2], fill=fill, outline=outline, width=1)

    def _draw_route(
        self,
        draw: ImageDraw.ImageDraw,
        waypoints: List[Point],
        color,
        line_width: int,
    ):
        """Draw a routed cable with an arrowhead at the target end."""
        if len(waypoints) < 2:
            return
        canvas_points = [self._to_canvas(p) for p in waypoints]
        draw.line(canvas_points, fill=color, width=line_width, joint="curve")
        self._draw_arrowhead(draw, canvas_points[-2], canvas_points[-1], color)

    def _draw_arrowhead(self, draw, from_point, to_point, color):
        x1, y1 = from_point
        x2, y2 = to_point
        arrow_size = 6 * self.scale
        angle = math.atan2(y2 - y1, x2 - x1)

        ax1 = x2 - arrow_size * math.cos(angle - math.pi / 6)
        ay1 = y2 - arrow_size * math.sin(angle - math.pi / 6)
        ax2 = x2 - arrow_size * math.cos(angle + math.pi / 6)
        ay2 = y2 - arrow_size * math.sin(angle + math.pi / 6)
        draw.polygon([(x2, y2), (ax1, ay1), (ax2, ay2)], fill=color)


def _extent(boxes: List[Box], points: List[Point]) -> Box:
    xs = [b[0] for b in boxes] + [b[2] for b in boxes] + [p[0] for p in points]
    ys = [b[1] for b in boxes] + [b[3] for b in boxes] + [p[1] for p in points]
    if not xs:
        return (0, 0, 0, 0)
    return (min(xs), min(ys), max(xs), max(ys))


def render_to_png(
    layout: LayoutGraph,
    result: RoutingResult,
    output_path: str = "routes.png",
    obstacles: Optional[Sequence[Obstacle]] = None,
    **kwargs,
) -> str:
    """
    Convenience function to save a routing preview.

    Args:
        layout: The routed layout.
        result: Routes from an EdgeRouter.
        output_path: Path to save the PNG file.
        obstacles: Obstacle index to outline.
        **kwargs: Additional arguments for RoutePreview.

    Returns:
        Path to the saved PNG file
    """
    preview = RoutePreview(**kwargs)
    return preview.save(layout, result, output_path, obstacles or ())
