"""Integration tests for the complete layout-to-routes pipeline.

These tests cover reading an ELK-style layout, routing every cable and
rendering a preview, the way a diagram tool would drive the package.
"""

import json
import logging

from PIL import Image

from wireflow import (
    EdgeRouter,
    FailureReason,
    RouteStrategy,
    RoutingConfig,
    build_obstacles,
    load_layout,
    render_to_png,
)
from wireflow.coordinates import resolve_port
from wireflow.geometry import is_orthogonal


class TestRackLayout:
    """End-to-end routing of the rack layout fixture."""

    def test_every_edge_is_accounted_for(self, rack_layout):
        """Each edge is either routed or reported, never both."""
        result = EdgeRouter().route_all(rack_layout)
        assert set(result.routes) == {"mic-di", "di-console"}
        assert [f.edge_id for f in result.failures] == ["dangling"]
        assert result.failures[0].reason == FailureReason.UNRESOLVED_PORT

    def test_layout_geometry_is_reused(self, rack_layout):
        route = EdgeRouter().route_all(rack_layout).routes["mic-di"]
        assert route.strategy == RouteStrategy.LAYOUT
        assert route.waypoints == [(120, 80), (170, 80)]

    def test_synthesized_route(self, rack_layout):
        """The mic box near the source forces a detour over it."""
        route = EdgeRouter().route_all(rack_layout).routes["di-console"]
        assert route.strategy == RouteStrategy.SYNTHESIZED
        assert route.waypoints == [
            (250, 80),
            (280, 80),
            (280, 35),
            (145, 35),
            (145, 80),
            (252.5, 80),
            (360, 80),
            (390, 80),
        ]

    def test_synthesized_routes_are_orthogonal(self, rack_layout):
        result = EdgeRouter().route_all(rack_layout)
        for route in result.routes.values():
            assert is_orthogonal(route.waypoints)

    def test_synthesized_routes_end_on_ports(self, rack_layout):
        """Synthesized routes start and end exactly on the resolved ports."""
        result = EdgeRouter().route_all(rack_layout)
        for edge in rack_layout.edges:
            route = result.routes.get(edge.id)
            if route is None or route.strategy != RouteStrategy.SYNTHESIZED:
                continue
            assert route.waypoints[0] == resolve_port(rack_layout.root, edge.source).point
            assert route.waypoints[-1] == resolve_port(rack_layout.root, edge.target).point

    def test_routing_is_deterministic(self, rack_layout):
        first = EdgeRouter().route_all(rack_layout)
        second = EdgeRouter().route_all(rack_layout)
        assert first.routes == second.routes
        assert first.failures == second.failures

    def test_direct_mode(self, rack_layout):
        """Disabling collision detection gives a single-corner route."""
        config = RoutingConfig(enable_collision_detection=False)
        route = EdgeRouter(config).route_all(rack_layout).routes["di-console"]
        assert route.strategy == RouteStrategy.DIRECT
        assert route.waypoints == [(250, 80), (390, 80)]

    def test_skipped_edge_is_logged(self, rack_layout, caplog):
        with caplog.at_level(logging.WARNING, logger="wireflow.router"):
            EdgeRouter().route_all(rack_layout)
        assert "dangling" in caplog.text
        assert "amp/in" in caplog.text


class TestDebugPipeline:
    """Tests for tracing and previewing a routing pass."""

    def test_trace_and_preview(self, rack_layout_json, tmp_path):
        layout_path = tmp_path / "rack.json"
        layout_path.write_text(json.dumps(rack_layout_json), encoding="utf-8")
        layout = load_layout(str(layout_path))

        router = EdgeRouter(debug=True)
        result = router.route_all(layout)
        trace = router.get_trace()

        assert trace.obstacle_count == 3
        assert trace.get_decision("di-console").details["source_detour"] == "above"
        assert trace.get_decision("dangling").outcome == "failed"

        trace_path = tmp_path / "trace.txt"
        trace.dump_to_file(str(trace_path))
        assert "di-console: synthesized" in trace_path.read_text(encoding="utf-8")

        png_path = tmp_path / "routes.png"
        render_to_png(
            layout,
            result,
            str(png_path),
            obstacles=build_obstacles(layout.root, router.config.obstacle_padding),
        )
        with Image.open(png_path) as img:
            assert img.size[0] > 0 and img.size[1] > 0
