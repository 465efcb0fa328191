"""
Hierarchical coordinate resolution.

The layout engine positions every node relative to its parent. A TreeIndex
turns the node tree into a networkx DiGraph (parent -> child) plus a port
lookup table, and resolves absolute offsets, port positions and the nearest
common ancestor of two nodes. An EdgeRouter builds one index per render
pass and shares it across every edge of that pass.

The module-level functions are one-off conveniences that build a fresh
index per call. Every lookup returns None when the id is not in the tree.
"""

from typing import Dict, Optional, Tuple

import networkx as nx

from .models import Point, PositionedNode, ResolvedPort


def tree_graph(root: PositionedNode) -> nx.DiGraph:
    """
    Build a parent -> child graph of the box tree.

    Each graph node carries its PositionedNode under the ``box`` attribute.
    """
    graph = nx.DiGraph()
    graph.add_node(root.id, box=root)
    stack = [root]
    while stack:
        node = stack.pop()
        for child in node.children:
            graph.add_node(child.id, box=child)
            graph.add_edge(node.id, child.id)
            stack.append(child)
    return graph


class TreeIndex:
    """Structure queries over one positioned box tree."""

    def __init__(self, root: PositionedNode):
        self.root = root
        self.graph = tree_graph(root)
        # port id -> (owning node id, index in its ports tuple)
        self.ports: Dict[str, Tuple[str, int]] = {}
        for node_id, box in self.graph.nodes(data="box"):
            for i, port in enumerate(box.ports):
                self.ports[port.id] = (node_id, i)
        self._offsets: Dict[str, Point] = {}

    def find_node(self, node_id: str) -> Optional[PositionedNode]:
        if node_id not in self.graph:
            return None
        return self.graph.nodes[node_id]["box"]

    def parent_id(self, node_id: str) -> Optional[str]:
        if node_id not in self.graph:
            return None
        return next(iter(self.graph.predecessors(node_id)), None)

    def absolute_offset(self, node_id: str) -> Optional[Point]:
        """
        Absolute position of a node's top-left corner.

        Sums the offsets of every node on the path from the root, the root
        included.
        """
        if node_id not in self.graph:
            return None
        if node_id not in self._offsets:
            path = nx.shortest_path(self.graph, self.root.id, node_id)
            x = sum(self.graph.nodes[n]["box"].x for n in path)
            y = sum(self.graph.nodes[n]["box"].y for n in path)
            self._offsets[node_id] = (x, y)
        return self._offsets[node_id]

    def port_owner(self, port_id: str) -> Optional[str]:
        """Id of the node that owns a port."""
        entry = self.ports.get(port_id)
        return entry[0] if entry else None

    def resolve_port(self, port_id: str) -> Optional[ResolvedPort]:
        """Resolve a port id to its absolute position and side."""
        entry = self.ports.get(port_id)
        if entry is None:
            return None
        node_id, i = entry
        port = self.find_node(node_id).ports[i]
        ox, oy = self.absolute_offset(node_id)
        return ResolvedPort(
            node_id=node_id,
            port_id=port.id,
            x=ox + port.x,
            y=oy + port.y,
            side=port.side,
        )

    def common_container(self, node_a: str, node_b: str) -> Optional[str]:
        """Id of the nearest common ancestor of two nodes."""
        if node_a not in self.graph or node_b not in self.graph:
            return None
        return nx.lowest_common_ancestor(self.graph, node_a, node_b)


def absolute_offset(root: PositionedNode, node_id: str) -> Optional[Point]:
    return TreeIndex(root).absolute_offset(node_id)


def find_node(root: PositionedNode, node_id: str) -> Optional[PositionedNode]:
    return TreeIndex(root).find_node(node_id)


def parent_id(root: PositionedNode, node_id: str) -> Optional[str]:
    return TreeIndex(root).parent_id(node_id)


def port_owner(root: PositionedNode, port_id: str) -> Optional[str]:
    return TreeIndex(root).port_owner(port_id)


def resolve_port(root: PositionedNode, port_id: str) -> Optional[ResolvedPort]:
    return TreeIndex(root).resolve_port(port_id)


def common_container(
    root: PositionedNode, node_a: str, node_b: str
) -> Optional[str]:
    return TreeIndex(root).common_container(node_a, node_b)
