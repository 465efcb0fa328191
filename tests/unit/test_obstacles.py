"""Unit tests for the obstacle index and local filter."""

from wireflow.models import Obstacle, PositionedNode
from wireflow.obstacles import build_obstacles, filter_local_obstacles


class TestBuildObstacles:
    """Tests for build_obstacles."""

    def test_one_obstacle_per_device(self, two_device_tree):
        """Every leaf becomes a padded obstacle, in document order."""
        obstacles = build_obstacles(two_device_tree, padding=10)
        assert obstacles == (
            Obstacle(id="src", x=-10, y=10, width=60, height=80),
            Obstacle(id="mid", x=90, y=20, width=60, height=60),
            Obstacle(id="dst", x=250, y=10, width=60, height=80),
        )

    def test_returns_tuple(self, two_device_tree):
        """The index is immutable."""
        assert isinstance(build_obstacles(two_device_tree, padding=0), tuple)

    def test_containers_are_not_obstacles(self):
        """Group boxes are skipped; nested devices get absolute coordinates."""
        root = PositionedNode(
            id="root",
            x=5,
            y=5,
            children=(
                PositionedNode(
                    id="area",
                    x=100,
                    y=100,
                    width=200,
                    height=200,
                    children=(
                        PositionedNode(id="dev", x=10, y=20, width=30, height=40),
                    ),
                ),
            ),
        )
        obstacles = build_obstacles(root, padding=0)
        assert obstacles == (Obstacle(id="dev", x=115, y=125, width=30, height=40),)

    def test_root_is_never_an_obstacle(self):
        """A childless root is the drawing, not a device."""
        root = PositionedNode(id="root", width=100, height=100)
        assert build_obstacles(root, padding=10) == ()

    def test_zero_size_devices_are_skipped(self):
        """Degenerate boxes do not produce obstacles."""
        root = PositionedNode(
            id="root",
            children=(
                PositionedNode(id="empty", x=10, y=10, width=0, height=20),
                PositionedNode(id="dev", x=50, y=10, width=20, height=20),
            ),
        )
        assert [o.id for o in build_obstacles(root, padding=5)] == ["dev"]


class TestFilterLocalObstacles:
    """Tests for filter_local_obstacles."""

    def test_radius_is_strict(self, blocking_obstacle):
        """An obstacle whose center is exactly at the radius is excluded."""
        assert filter_local_obstacles((0, 50), 100, [blocking_obstacle]) == []
        assert filter_local_obstacles((0, 50), 100.5, [blocking_obstacle]) == [
            blocking_obstacle
        ]

    def test_excluded_ids(self, blocking_obstacle):
        """Obstacles of the edge's own endpoints are ignored."""
        result = filter_local_obstacles(
            (0, 50), 500, [blocking_obstacle], excluded_ids={"blocker"}
        )
        assert result == []

    def test_keeps_input_order(self):
        """Filtering does not reorder obstacles."""
        far = Obstacle(id="far", x=900, y=900, width=10, height=10)
        a = Obstacle(id="a", x=20, y=0, width=10, height=10)
        b = Obstacle(id="b", x=0, y=20, width=10, height=10)
        assert filter_local_obstacles((0, 0), 100, [a, far, b]) == [a, b]
