#!/usr/bin/env python3
"""
Demo script for the wireflow cable router.

Routes a small stage-to-front-of-house wiring layout, prints the routes and
the debug trace, and saves a PNG preview.
"""

import logging
import sys

from wireflow import EdgeRouter, RoutingConfig, build_obstacles, parse_layout
from wireflow.png_renderer import render_to_png

STAGE_LAYOUT = {
    "id": "root",
    "width": 640,
    "height": 320,
    "children": [
        {
            "id": "stage",
            "x": 20,
            "y": 20,
            "width": 260,
            "height": 260,
            "labels": [{"text": "Stage"}],
            "children": [
                {
                    "id": "mic",
                    "x": 20,
                    "y": 40,
                    "width": 80,
                    "height": 40,
                    "labels": [{"text": "Mic"}],
                    "ports": [{"id": "mic/out", "x": 80, "y": 20, "side": "EAST"}],
                },
                {
                    "id": "di",
                    "x": 150,
                    "y": 40,
                    "width": 80,
                    "height": 40,
                    "labels": [{"text": "DI"}],
                    "ports": [
                        {"id": "di/in", "x": 0, "y": 20, "side": "WEST"},
                        {"id": "di/out", "x": 80, "y": 20, "side": "EAST"},
                    ],
                },
                {
                    "id": "wedge",
                    "x": 150,
                    "y": 170,
                    "width": 80,
                    "height": 40,
                    "labels": [{"text": "Wedge"}],
                    "ports": [{"id": "wedge/in", "x": 80, "y": 20, "side": "EAST"}],
                },
            ],
            "edges": [
                {
                    "id": "mic-di",
                    "sources": ["mic/out"],
                    "targets": ["di/in"],
                    "sections": [
                        {
                            "startPoint": {"x": 100, "y": 60},
                            "endPoint": {"x": 150, "y": 60},
                        }
                    ],
                }
            ],
        },
        {
            "id": "foh",
            "x": 360,
            "y": 20,
            "width": 240,
            "height": 260,
            "labels": [{"text": "FOH"}],
            "children": [
                {
                    "id": "console",
                    "x": 40,
                    "y": 40,
                    "width": 120,
                    "height": 80,
                    "labels": [{"text": "Console"}],
                    "ports": [
                        {"id": "console/in", "x": 0, "y": 20},
                        {"id": "console/mon", "x": 0, "y": 60},
                    ],
                }
            ],
        },
    ],
    "edges": [
        {"id": "di-console", "sources": ["di/out"], "targets": ["console/in"]},
        {"id": "console-wedge", "sources": ["console/mon"], "targets": ["wedge/in"]},
        {"id": "console-amp", "sources": ["console/mon"], "targets": ["amp/in"]},
    ],
}


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def main(output_path="stage_routes.png"):
    """Route the demo layout and save a preview."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    layout = parse_layout(STAGE_LAYOUT)
    config = RoutingConfig()
    router = EdgeRouter(config, debug=True)
    result = router.route_all(layout)

    print_header("Routes")
    for edge_id, route in result.routes.items():
        print(f"{edge_id} [{route.strategy.value}]")
        print(f"  {route.waypoints}")

    if result.failures:
        print_header("Skipped")
        for failure in result.failures:
            print(f"  {failure}")

    print_header("Trace")
    print(router.get_trace().dump())

    obstacles = build_obstacles(layout.root, config.obstacle_padding)
    render_to_png(layout, result, output_path, obstacles=obstacles)
    print(f"\nSaved: {output_path}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
