"""Pytest configuration and shared fixtures for wireflow tests."""

import pytest

from wireflow import (
    LayoutEdge,
    Obstacle,
    Port,
    PortSide,
    PositionedNode,
    ResolvedPort,
    RoutingConfig,
    parse_layout,
)


@pytest.fixture
def config():
    """Default routing options."""
    return RoutingConfig()


@pytest.fixture
def east_source():
    """Source port on the east face of a device, at (0, 50)."""
    return ResolvedPort(node_id="src", port_id="src/out", x=0, y=50, side=PortSide.EAST)


@pytest.fixture
def west_target():
    """Target port on the west face of a device, at (200, 50)."""
    return ResolvedPort(
        node_id="dst", port_id="dst/in", x=200, y=50, side=PortSide.WEST
    )


@pytest.fixture
def blocking_obstacle():
    """Obstacle sitting between (0, 50) and (200, 50)."""
    return Obstacle(id="blocker", x=50, y=0, width=100, height=100)


@pytest.fixture
def two_device_tree():
    """Two devices side by side with a third one in between, no containers."""
    return PositionedNode(
        id="root",
        children=(
            PositionedNode(
                id="src",
                x=0,
                y=20,
                width=40,
                height=60,
                ports=(Port(id="src/out", x=40, y=30, side=PortSide.EAST),),
            ),
            PositionedNode(id="mid", x=100, y=30, width=40, height=40),
            PositionedNode(
                id="dst",
                x=260,
                y=20,
                width=40,
                height=60,
                ports=(Port(id="dst/in", x=0, y=30, side=PortSide.WEST),),
            ),
        ),
    )


@pytest.fixture
def unrouted_edge():
    """Edge between the two ports of ``two_device_tree`` without sections."""
    return LayoutEdge(id="e1", source="src/out", target="dst/in")


@pytest.fixture
def rack_layout_json():
    """ELK layout with two nested areas and a mix of routed and unrouted edges."""
    return {
        "id": "root",
        "x": 0,
        "y": 0,
        "width": 600,
        "height": 300,
        "children": [
            {
                "id": "stage",
                "x": 20,
                "y": 20,
                "width": 250,
                "height": 200,
                "labels": [{"text": "Stage"}],
                "children": [
                    {
                        "id": "mic",
                        "x": 20,
                        "y": 40,
                        "width": 80,
                        "height": 40,
                        "labels": [{"text": "Mic"}],
                        "ports": [
                            {
                                "id": "mic/out",
                                "x": 80,
                                "y": 20,
                                "properties": {"org.eclipse.elk.portSide": "EAST"},
                            }
                        ],
                    },
                    {
                        "id": "di",
                        "x": 150,
                        "y": 40,
                        "width": 80,
                        "height": 40,
                        "ports": [
                            {"id": "di/in", "x": 0, "y": 20, "side": "WEST"},
                            {"id": "di/out", "x": 80, "y": 20, "side": "EAST"},
                        ],
                    },
                ],
                "edges": [
                    {
                        "id": "mic-di",
                        "sources": ["mic/out"],
                        "targets": ["di/in"],
                        "sections": [
                            {
                                "id": "s1",
                                "startPoint": {"x": 100, "y": 60},
                                "endPoint": {"x": 150, "y": 60},
                            }
                        ],
                    }
                ],
            },
            {
                "id": "foh",
                "x": 350,
                "y": 20,
                "width": 200,
                "height": 200,
                "children": [
                    {
                        "id": "console",
                        "x": 40,
                        "y": 40,
                        "width": 100,
                        "height": 60,
                        "ports": [{"id": "console/in", "x": 0, "y": 20}],
                    }
                ],
            },
        ],
        "edges": [
            {"id": "di-console", "sources": ["di/out"], "targets": ["console/in"]},
            {"id": "dangling", "sources": ["di/out"], "targets": ["amp/in"]},
        ],
    }


@pytest.fixture
def rack_layout(rack_layout_json):
    """Parsed ``rack_layout_json``."""
    return parse_layout(rack_layout_json)
