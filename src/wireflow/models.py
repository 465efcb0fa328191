"""
Data models for wiring diagram routing.

This module contains the dataclasses shared by the layout reader, the
obstacle index and the edge router. Positioned nodes form an immutable tree
as produced by the layout engine; everything the router derives from that
tree (obstacles, resolved ports, routes) is expressed in absolute
coordinates.

Classes:
    PortSide: The face of a device a cable leaves from or enters.
    Port: A connection point on a node, relative to that node.
    PositionedNode: A laid-out box; devices are leaves, containers have children.
    Obstacle: A padded absolute rectangle for one device box.
    EdgeSection: Routed geometry supplied by the layout engine.
    LayoutEdge: A cable between two ports.
    LayoutGraph: Root node plus every edge of a layout result.
    ResolvedPort: A port resolved to absolute coordinates.
    RoutingRequest: Input to the synthesized router for one edge.
    RoutePath: A routed edge ready for drawing.
    RouteFailure: Why an edge could not be routed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

Point = Tuple[float, float]


class PortSide(Enum):
    """Which face of a device a port sits on."""

    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def direction(self) -> Tuple[int, int]:
        """Unit vector pointing away from the device."""
        return _SIDE_DIRECTIONS[self]

    @property
    def is_horizontal(self) -> bool:
        """True when cables leave this side along the x axis."""
        return self in (PortSide.EAST, PortSide.WEST)


_SIDE_DIRECTIONS = {
    PortSide.EAST: (1, 0),
    PortSide.WEST: (-1, 0),
    PortSide.NORTH: (0, -1),
    PortSide.SOUTH: (0, 1),
}


@dataclass(frozen=True)
class Port:
    """A connection port, positioned relative to its owning node."""

    id: str
    x: float
    y: float
    side: PortSide


@dataclass(frozen=True)
class PositionedNode:
    """
    A box positioned by the layout engine.

    Coordinates are offsets from the immediate parent. A node without
    children is a device; a node with children is a container.

    Attributes:
        id: Unique node id.
        x: X offset relative to the parent.
        y: Y offset relative to the parent.
        width: Box width.
        height: Box height.
        children: Nested nodes.
        ports: Ports owned by this node.
        label: Display text, empty when the layout carries none.
    """

    id: str
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    children: Tuple["PositionedNode", ...] = ()
    ports: Tuple[Port, ...] = ()
    label: str = ""

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "ports", tuple(self.ports))

    @property
    def is_container(self) -> bool:
        return bool(self.children)


@dataclass(frozen=True)
class Obstacle:
    """Padded bounding box of one device, in absolute coordinates."""

    id: str
    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class EdgeSection:
    """Routed geometry from the layout engine, in the container's frame."""

    start_point: Point
    end_point: Point
    bend_points: Tuple[Point, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "bend_points", tuple(self.bend_points))

    @property
    def points(self) -> List[Point]:
        return [self.start_point, *self.bend_points, self.end_point]


@dataclass(frozen=True)
class LayoutEdge:
    """A cable between two ports, with optional layout-engine sections."""

    id: str
    source: str
    target: str
    sections: Tuple[EdgeSection, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))


@dataclass
class LayoutGraph:
    """Result of reading a layout: the box tree and all of its edges."""

    root: PositionedNode
    edges: List[LayoutEdge] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedPort:
    """A port resolved to an absolute position on its device."""

    node_id: str
    port_id: str
    x: float
    y: float
    side: PortSide

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class RoutingRequest:
    """
    Everything the synthesized router needs for one edge.

    Obstacles belonging to the edge's own endpoint devices are excluded;
    when ``excluded_node_ids`` is not given it defaults to both endpoints.
    """

    source: ResolvedPort
    target: ResolvedPort
    excluded_node_ids: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if self.excluded_node_ids is None:
            object.__setattr__(
                self,
                "excluded_node_ids",
                frozenset({self.source.node_id, self.target.node_id}),
            )


class RouteStrategy(Enum):
    """How a route's waypoints were produced."""

    LAYOUT = "layout"  # Geometry supplied by the layout engine
    SYNTHESIZED = "synthesized"  # Local obstacle-avoiding router
    DIRECT = "direct"  # Collision detection disabled


@dataclass
class RoutePath:
    """A routed edge in absolute coordinates."""

    edge_id: str
    waypoints: List[Point]
    strategy: RouteStrategy

    @property
    def segments(self) -> List[Tuple[Point, Point]]:
        return list(zip(self.waypoints, self.waypoints[1:]))


class FailureReason(Enum):
    """Why an edge could not be routed."""

    UNRESOLVED_PORT = "unresolved_port"
    UNRESOLVED_CONTAINER = "unresolved_container"


@dataclass(frozen=True)
class RouteFailure:
    """An edge that was skipped, with a diagnostic for the caller."""

    edge_id: str
    reason: FailureReason
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.edge_id}: {self.reason.value} ({self.detail})"
