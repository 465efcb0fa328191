"""
wireflow - Local orthogonal cable routing for wiring diagrams

Routes cables between device ports in a laid-out box tree. Geometry supplied
by the layout engine is reused; otherwise a short obstacle-avoiding
orthogonal path is synthesized near each port.

Example:
    >>> from wireflow import EdgeRouter, load_layout
    >>> layout = load_layout("rack_layout.json")
    >>> result = EdgeRouter().route_all(layout)
    >>> for edge_id, route in result.routes.items():
    ...     print(edge_id, route.waypoints)

Debug Mode Example:
    >>> router = EdgeRouter(debug=True)
    >>> result = router.route_all(layout)
    >>> print(router.get_trace().summary())
"""

from .config import RoutingConfig
from .coordinates import TreeIndex
from .edge_routing import (
    DetourChoice,
    SegmentCollision,
    choose_detour,
    compute_extension,
    connect_middle,
    detect_local_collisions,
    route_local_detour,
)
from .exceptions import ConfigError, LayoutParseError, WireflowError
from .geometry import manhattan_length, segment_intersects_obstacle
from .models import (
    EdgeSection,
    FailureReason,
    LayoutEdge,
    LayoutGraph,
    Obstacle,
    Port,
    PortSide,
    PositionedNode,
    ResolvedPort,
    RouteFailure,
    RoutePath,
    RouteStrategy,
    RoutingRequest,
)
from .obstacles import build_obstacles, filter_local_obstacles
from .parser import Parser, load_layout, parse_layout
from .png_renderer import RoutePreview, render_to_png
from .router import EdgeRouter, RoutingResult, compute_route, route_request
from .tracer import RouteDecision, RouteTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "EdgeRouter",
    "RoutingResult",
    "compute_route",
    "route_request",
    "RoutingConfig",
    "TreeIndex",
    # Layout input
    "Parser",
    "parse_layout",
    "load_layout",
    # Model
    "PositionedNode",
    "Port",
    "PortSide",
    "Obstacle",
    "EdgeSection",
    "LayoutEdge",
    "LayoutGraph",
    "ResolvedPort",
    "RoutingRequest",
    "RoutePath",
    "RouteStrategy",
    "RouteFailure",
    "FailureReason",
    # Routing steps
    "build_obstacles",
    "filter_local_obstacles",
    "segment_intersects_obstacle",
    "manhattan_length",
    "compute_extension",
    "choose_detour",
    "route_local_detour",
    "connect_middle",
    "detect_local_collisions",
    "DetourChoice",
    "SegmentCollision",
    # Errors
    "WireflowError",
    "LayoutParseError",
    "ConfigError",
    # Debug/Tracing
    "RouteTrace",
    "RouteDecision",
    "RoutePreview",
    "render_to_png",
]
