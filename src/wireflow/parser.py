"""
Layout reader for wiring diagrams.

Reads a layout result in ELK JSON form (nodes with ``x``, ``y``, ``width``,
``height``, nested ``children``, ``ports`` and ``edges``) into the immutable
box tree and edge list used by the router.
"""

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional, Set, Union

from .exceptions import LayoutParseError
from .models import (
    EdgeSection,
    LayoutEdge,
    LayoutGraph,
    Point,
    Port,
    PortSide,
    PositionedNode,
)

# Property keys under which ELK stores a port's side
SIDE_KEYS = ("org.eclipse.elk.portSide", "elk.portSide", "portSide")


class Parser:
    """Parses ELK layout JSON into a LayoutGraph."""

    def __init__(self):
        self._node_ids: Set[str] = set()
        self._port_ids: Set[str] = set()

    def parse(self, data: Any) -> LayoutGraph:
        """
        Parse a laid-out ELK graph.

        Args:
            data: The root graph object as decoded from JSON.

        Returns:
            LayoutGraph with the box tree and every edge found at any depth.

        Raises:
            LayoutParseError: If the document is malformed.
        """
        if not isinstance(data, Mapping):
            raise LayoutParseError("Layout must be a JSON object")

        self._node_ids = set()
        self._port_ids = set()
        edges: List[LayoutEdge] = []
        root = self._parse_node(data, "root", edges)
        return LayoutGraph(root=root, edges=edges)

    def _parse_node(
        self, data: Mapping, path: str, edges: List[LayoutEdge]
    ) -> PositionedNode:
        if not isinstance(data, Mapping):
            raise LayoutParseError(f"{path}: node must be an object")
        node_id = data.get("id")
        if not isinstance(node_id, str) or not node_id:
            raise LayoutParseError(f"{path}: node is missing an id")
        if node_id in self._node_ids:
            raise LayoutParseError(f"{path}: duplicate node id '{node_id}'")
        self._node_ids.add(node_id)

        width = _number(data, "width", node_id)
        height = _number(data, "height", node_id)

        children = tuple(
            self._parse_node(child, f"{node_id}/children[{i}]", edges)
            for i, child in enumerate(_list(data, "children", node_id))
        )
        ports = tuple(
            self._parse_port(port, node_id, width, height)
            for port in _list(data, "ports", node_id)
        )
        for edge in _list(data, "edges", node_id):
            edges.append(self._parse_edge(edge, node_id))

        return PositionedNode(
            id=node_id,
            x=_number(data, "x", node_id),
            y=_number(data, "y", node_id),
            width=width,
            height=height,
            children=children,
            ports=ports,
            label=_first_label(data),
        )

    def _parse_port(
        self, data: Any, node_id: str, node_width: float, node_height: float
    ) -> Port:
        if not isinstance(data, Mapping):
            raise LayoutParseError(f"{node_id}: port must be an object")
        port_id = data.get("id")
        if not isinstance(port_id, str) or not port_id:
            raise LayoutParseError(f"{node_id}: port is missing an id")
        if port_id in self._port_ids:
            raise LayoutParseError(f"{node_id}: duplicate port id '{port_id}'")
        self._port_ids.add(port_id)

        # The cable attaches at the center of the port's own box
        x = _number(data, "x", port_id) + _number(data, "width", port_id) / 2
        y = _number(data, "y", port_id) + _number(data, "height", port_id) / 2

        side = _explicit_side(data, port_id)
        if side is None:
            side = infer_port_side(x, y, node_width, node_height)
        return Port(id=port_id, x=x, y=y, side=side)

    def _parse_edge(self, data: Any, container_id: str) -> LayoutEdge:
        if not isinstance(data, Mapping):
            raise LayoutParseError(f"{container_id}: edge must be an object")
        edge_id = data.get("id")
        if not isinstance(edge_id, str) or not edge_id:
            raise LayoutParseError(f"{container_id}: edge is missing an id")

        source = _endpoint(data, "source", edge_id)
        target = _endpoint(data, "target", edge_id)
        sections = tuple(
            _parse_section(section, edge_id)
            for section in _list(data, "sections", edge_id)
        )
        return LayoutEdge(id=edge_id, source=source, target=target, sections=sections)


def infer_port_side(
    x: float, y: float, node_width: float, node_height: float
) -> PortSide:
    """
    Side of the node face nearest to a port position.

    Ties go to WEST, then EAST, NORTH and SOUTH.
    """
    distances = [
        (abs(x), PortSide.WEST),
        (abs(node_width - x), PortSide.EAST),
        (abs(y), PortSide.NORTH),
        (abs(node_height - y), PortSide.SOUTH),
    ]
    return min(distances, key=lambda d: d[0])[1]


def _explicit_side(data: Mapping, port_id: str) -> Optional[PortSide]:
    candidates = [data.get("side")]
    for bag_name in ("properties", "layoutOptions"):
        bag = data.get(bag_name)
        if isinstance(bag, Mapping):
            candidates.extend(bag.get(key) for key in SIDE_KEYS)

    for value in candidates:
        if value is None:
            continue
        if not isinstance(value, str):
            raise LayoutParseError(f"{port_id}: port side must be a string")
        name = value.strip().upper()
        if name == "UNDEFINED":
            continue
        try:
            return PortSide[name]
        except KeyError:
            raise LayoutParseError(f"{port_id}: unknown port side '{value}'") from None
    return None


def _endpoint(data: Mapping, role: str, edge_id: str) -> str:
    # Simple edges name ports directly; ELK extended edges use lists
    value = data.get(f"{role}Port") or data.get(role)
    if value is None:
        refs = data.get(f"{role}s")
        if isinstance(refs, list) and refs:
            value = refs[0]
    if not isinstance(value, str) or not value:
        raise LayoutParseError(f"{edge_id}: edge is missing its {role}")
    return value


def _parse_section(data: Any, edge_id: str) -> EdgeSection:
    if not isinstance(data, Mapping):
        raise LayoutParseError(f"{edge_id}: section must be an object")
    if "startPoint" not in data or "endPoint" not in data:
        raise LayoutParseError(f"{edge_id}: section needs startPoint and endPoint")
    bends = tuple(_point(p, edge_id) for p in _list(data, "bendPoints", edge_id))
    return EdgeSection(
        start_point=_point(data["startPoint"], edge_id),
        end_point=_point(data["endPoint"], edge_id),
        bend_points=bends,
    )


def _point(data: Any, owner: str) -> Point:
    if not isinstance(data, Mapping):
        raise LayoutParseError(f"{owner}: point must be an object with x and y")
    return (_number(data, "x", owner), _number(data, "y", owner))


def _number(data: Mapping, key: str, owner: str) -> float:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutParseError(f"{owner}: '{key}' must be a number, got {value!r}")
    return value


def _list(data: Mapping, key: str, owner: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise LayoutParseError(f"{owner}: '{key}' must be a list")
    return value


def _first_label(data: Mapping) -> str:
    labels = data.get("labels")
    if isinstance(labels, list) and labels and isinstance(labels[0], Mapping):
        return str(labels[0].get("text", ""))
    return ""


def parse_layout(data: Any) -> LayoutGraph:
    """
    Convenience function to parse a decoded ELK layout.

    Args:
        data: The root graph object.

    Returns:
        LayoutGraph
    """
    parser = Parser()
    return parser.parse(data)


def load_layout(source: Union[str, Path]) -> LayoutGraph:
    """
    Read an ELK layout JSON file.

    Raises:
        LayoutParseError: If the file is not valid JSON or not a valid layout.
    """
    text = Path(source).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LayoutParseError(f"{source}: invalid JSON ({exc})") from exc
    return parse_layout(data)
