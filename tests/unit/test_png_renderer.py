"""Tests for the PNG routing preview."""

from PIL import Image

from wireflow.models import LayoutGraph, PositionedNode
from wireflow.obstacles import build_obstacles
from wireflow.png_renderer import RoutePreview, render_to_png
from wireflow.router import EdgeRouter, RoutingResult


class TestRoutePreview:
    """Tests for RoutePreview."""

    def test_render_returns_image(self, rack_layout):
        result = EdgeRouter().route_all(rack_layout)
        img = RoutePreview().render(rack_layout, result)
        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"
        assert img.width > 100
        assert img.height > 100

    def test_canvas_covers_routes_outside_boxes(self, rack_layout):
        """Detours above the diagram still fit on the canvas."""
        result = EdgeRouter().route_all(rack_layout)
        preview = RoutePreview(scale=1, margin=0)
        img = preview.render(rack_layout, result)
        xs = [p[0] for r in result.routes.values() for p in r.waypoints]
        ys = [p[1] for r in result.routes.values() for p in r.waypoints]
        assert img.width >= max(xs) - min(xs)
        assert img.height >= max(ys) - min(ys)

    def test_draws_something(self, rack_layout):
        """The image is not blank."""
        result = EdgeRouter().route_all(rack_layout)
        img = RoutePreview().render(
            rack_layout, result, build_obstacles(rack_layout.root, 10)
        )
        assert len(img.getcolors(maxcolors=100000)) > 1

    def test_empty_layout(self):
        layout = LayoutGraph(root=PositionedNode(id="root"))
        img = RoutePreview().render(layout, RoutingResult())
        assert img.size == (80, 80)

    def test_render_to_png(self, rack_layout, tmp_path):
        result = EdgeRouter().route_all(rack_layout)
        path = tmp_path / "routes.png"
        returned = render_to_png(rack_layout, result, str(path), scale=1)
        assert returned == str(path)
        with Image.open(path) as img:
            assert img.format == "PNG"
