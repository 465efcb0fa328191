"""
Edge routing orchestration for wiring diagrams.

Decides, per edge, between geometry already computed by the layout engine
and a locally synthesized orthogonal route:
- Layout sections are translated from their container frame and reused
- Otherwise both ports are extended, routed around nearby devices and
  joined in the middle
- Edges whose ports cannot be resolved are reported, never raised
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_CONFIG, RoutingConfig
from .coordinates import TreeIndex
from .edge_routing import (
    choose_detour,
    compute_extension,
    connect_middle,
    detect_local_collisions,
)
from .geometry import drop_repeated_points
from .models import (
    FailureReason,
    LayoutEdge,
    LayoutGraph,
    Obstacle,
    Point,
    PositionedNode,
    ResolvedPort,
    RouteFailure,
    RoutePath,
    RouteStrategy,
    RoutingRequest,
)
from .obstacles import build_obstacles, filter_local_obstacles
from .tracer import RouteTrace

logger = logging.getLogger(__name__)

RouteOutcome = Union[RoutePath, RouteFailure]


def route_request(
    request: RoutingRequest,
    obstacles: Sequence[Obstacle],
    config: RoutingConfig = DEFAULT_CONFIG,
) -> List[Point]:
    """
    Synthesize an orthogonal path for one edge.

    Args:
        request: Resolved source and target ports.
        obstacles: The full obstacle index for the render pass.
        config: Routing options.

    Returns:
        Waypoints from the source port to the target port.
    """
    waypoints, _ = _synthesize(request, obstacles, config)
    return waypoints


def _synthesize(
    request: RoutingRequest,
    obstacles: Sequence[Obstacle],
    config: RoutingConfig,
) -> Tuple[List[Point], Dict[str, Any]]:
    source, target = request.source, request.target

    if source.point == target.point:
        return [source.point], {"degenerate": True}

    if not config.enable_collision_detection:
        corner = (target.x, source.y)
        return drop_repeated_points([source.point, corner, target.point]), {}

    excluded = request.excluded_node_ids
    radius = config.local_search_radius
    source_local = filter_local_obstacles(source.point, radius, obstacles, excluded)
    target_local = filter_local_obstacles(target.point, radius, obstacles, excluded)

    source_ext = compute_extension(source, source_local, config)
    target_ext = compute_extension(target, target_local, config)

    source_detour = choose_detour(
        source_ext, source.side, source_local, target_ext, config.clearance
    )
    target_detour = choose_detour(
        target_ext, target.side, target_local, source_ext, config.clearance
    )
    target_interior = list(reversed(target_detour.interior))

    jog = connect_middle(source_detour.interior[-1], target_interior[0], source.side)

    waypoints = drop_repeated_points(
        [source.point, source_ext]
        + source_detour.interior
        + jog
        + target_interior
        + [target_ext, target.point]
    )

    collisions = detect_local_collisions(
        waypoints, source_local + target_local, config.protected_segments_count
    )
    details: Dict[str, Any] = {
        "source_detour": source_detour.name,
        "target_detour": target_detour.name,
        "local_obstacles": (len(source_local), len(target_local)),
    }
    for name, port, extension in (
        ("source_extension", source, source_ext),
        ("target_extension", target, target_ext),
    ):
        if _extension_adjusted(port, extension, config):
            details[name] = extension
    if source_detour.collided or target_detour.collided:
        details["fallback"] = True
    if collisions:
        details["collisions"] = [(c.segment_index, c.obstacle.id) for c in collisions]
    return waypoints, details


def _extension_adjusted(
    port: ResolvedPort, extension: Point, config: RoutingConfig
) -> bool:
    """True if the extension was pushed past an obstacle."""
    dx, dy = port.side.direction
    length = config.extension_length
    return extension != (port.x + dx * length, port.y + dy * length)


def _endpoint_node(index: TreeIndex, ref: str) -> Optional[str]:
    """Node owning a port id, or the id itself when it names a node."""
    owner = index.port_owner(ref)
    if owner is not None:
        return owner
    if index.find_node(ref) is not None:
        return ref
    return None


def _layout_waypoints(
    edge: LayoutEdge, index: TreeIndex
) -> Union[List[Point], RouteFailure]:
    source_node = _endpoint_node(index, edge.source)
    target_node = _endpoint_node(index, edge.target)
    if source_node is None or target_node is None:
        missing = edge.source if source_node is None else edge.target
        return RouteFailure(
            edge.id, FailureReason.UNRESOLVED_PORT, f"unknown endpoint '{missing}'"
        )

    container = index.common_container(source_node, target_node)
    # A device is never a coordinate frame; its edges live in the parent
    if container in (source_node, target_node):
        if not index.find_node(container).is_container:
            container = index.parent_id(container) or container

    offset = index.absolute_offset(container)
    if offset is None:
        return RouteFailure(
            edge.id, FailureReason.UNRESOLVED_CONTAINER, f"no offset for '{container}'"
        )

    ox, oy = offset
    points: List[Point] = []
    for section in edge.sections:
        points.extend((x + ox, y + oy) for x, y in section.points)
    return drop_repeated_points(points)


def _route(
    edge: LayoutEdge,
    index: TreeIndex,
    config: RoutingConfig,
    obstacles: Optional[Sequence[Obstacle]],
) -> Tuple[RouteOutcome, Dict[str, Any]]:
    if edge.sections:
        waypoints = _layout_waypoints(edge, index)
        if isinstance(waypoints, RouteFailure):
            return waypoints, {}
        return RoutePath(edge.id, waypoints, RouteStrategy.LAYOUT), {}

    source = index.resolve_port(edge.source)
    target = index.resolve_port(edge.target)
    if source is None or target is None:
        missing = edge.source if source is None else edge.target
        return (
            RouteFailure(
                edge.id, FailureReason.UNRESOLVED_PORT, f"unknown port '{missing}'"
            ),
            {},
        )

    if obstacles is None:
        obstacles = build_obstacles(index.root, config.obstacle_padding)

    waypoints, details = _synthesize(RoutingRequest(source, target), obstacles, config)
    strategy = (
        RouteStrategy.SYNTHESIZED
        if config.enable_collision_detection
        else RouteStrategy.DIRECT
    )
    return RoutePath(edge.id, waypoints, strategy), details


def compute_route(
    edge: LayoutEdge,
    root: PositionedNode,
    config: Optional[RoutingConfig] = None,
    obstacles: Optional[Sequence[Obstacle]] = None,
) -> RouteOutcome:
    """
    Compute the absolute-coordinate polyline for one edge.

    Geometry supplied by the layout engine is preferred whenever present.
    Otherwise a local obstacle-avoiding route is synthesized.

    Args:
        edge: The edge to route.
        root: Root of the positioned box tree.
        config: Routing options (defaults when omitted).
        obstacles: Obstacle index for the render pass; built from ``root``
            when omitted. Pass it explicitly when routing many edges.

    Returns:
        RoutePath, or RouteFailure if the edge's endpoints cannot be resolved.
    """
    outcome, _ = _route(edge, TreeIndex(root), config or DEFAULT_CONFIG, obstacles)
    return outcome


@dataclass
class RoutingResult:
    """Routes for one render pass, plus the edges that were skipped."""

    routes: Dict[str, RoutePath] = field(default_factory=dict)
    failures: List[RouteFailure] = field(default_factory=list)


class EdgeRouter:
    """
    Routes every edge of a layout result.

    The obstacle index and the tree index are built once per ``route_all``
    call and shared read-only by all edges in that pass. Neither outlives
    the call.
    """

    def __init__(self, config: Optional[RoutingConfig] = None, debug: bool = False):
        self.config = config or DEFAULT_CONFIG
        self.debug = debug
        self._trace: Optional[RouteTrace] = None

    def route_all(self, layout: LayoutGraph) -> RoutingResult:
        """
        Route all edges of a layout.

        Args:
            layout: Box tree and edges from the layout reader.

        Returns:
            RoutingResult keyed by edge id.
        """
        obstacles = build_obstacles(layout.root, self.config.obstacle_padding)
        index = TreeIndex(layout.root)
        self._trace = RouteTrace(obstacle_count=len(obstacles)) if self.debug else None

        result = RoutingResult()
        for edge in layout.edges:
            outcome = self.route_edge(edge, layout.root, obstacles, index)
            if isinstance(outcome, RouteFailure):
                result.failures.append(outcome)
            else:
                result.routes[edge.id] = outcome
        return result

    def route_edge(
        self,
        edge: LayoutEdge,
        root: PositionedNode,
        obstacles: Optional[Sequence[Obstacle]] = None,
        index: Optional[TreeIndex] = None,
    ) -> RouteOutcome:
        """
        Route a single edge, logging and tracing the decision.

        ``obstacles`` and ``index`` are built from ``root`` when omitted.
        """
        if index is None:
            index = TreeIndex(root)
        outcome, details = _route(edge, index, self.config, obstacles)

        if isinstance(outcome, RouteFailure):
            logger.warning("Skipping edge %s", outcome)
            self._record(edge.id, "failed", reason=outcome.reason.value)
            return outcome

        if "collisions" in details:
            logger.debug(
                "Edge %s has protected segments crossing devices: %s",
                edge.id,
                details["collisions"],
            )
        self._record(edge.id, outcome.strategy.value, **details)
        return outcome

    def _record(self, edge_id: str, outcome: str, **details: Any) -> None:
        if self._trace is not None:
            self._trace.add_decision(edge_id, outcome, **details)

    def get_trace(self) -> Optional[RouteTrace]:
        """
        Get the trace from the last ``route_all`` call.

        Returns None unless the router was created with ``debug=True``.
        """
        return self._trace
