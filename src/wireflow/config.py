"""
Routing configuration.

The module-level constants are the defaults used by RoutingConfig. A
RoutingConfig is immutable; use ``with_overrides`` to derive a variant for
a single render.
"""

from dataclasses import dataclass, fields, replace

from .exceptions import ConfigError

# =============================================================================
# ROUTING CONFIGURATION - Adjust these values to tune routing behavior
# =============================================================================

# --- Distance Parameters (in layout units) ---

# How far a cable travels straight out of a port before its first turn
EXTENSION_LENGTH = 30

# Uniform inflation applied to every device box when it becomes an obstacle
OBSTACLE_PADDING = 10

# Only obstacles whose center lies within this distance of a port are
# considered when routing near that port
LOCAL_SEARCH_RADIUS = 200

# Offset used when stepping past an obstacle or a group of obstacles
CLEARANCE = 15

# --- Collision Checking ---

# Number of segments at each end of a path that are collision-checked
PROTECTED_SEGMENTS_COUNT = 2

# When False, every edge is drawn as a plain two-segment connector
ENABLE_COLLISION_DETECTION = True

# =============================================================================


@dataclass(frozen=True)
class RoutingConfig:
    """
    Options for the local edge router.

    Attributes:
        extension_length: Departure distance from a port before the first turn.
        obstacle_padding: Uniform rectangle inflation for device boxes.
        local_search_radius: Obstacle-consideration radius around each port.
        protected_segments_count: Segments near each port that are checked.
        clearance: Detour offset beyond an obstacle's union box.
        enable_collision_detection: When False, skip obstacle handling and
            use a direct two-segment connector (for comparison/debugging).
    """

    extension_length: float = EXTENSION_LENGTH
    obstacle_padding: float = OBSTACLE_PADDING
    local_search_radius: float = LOCAL_SEARCH_RADIUS
    protected_segments_count: int = PROTECTED_SEGMENTS_COUNT
    clearance: float = CLEARANCE
    enable_collision_detection: bool = ENABLE_COLLISION_DETECTION

    def __post_init__(self):
        for name in (
            "extension_length",
            "obstacle_padding",
            "local_search_radius",
            "clearance",
        ):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be non-negative")
        if self.protected_segments_count < 0:
            raise ConfigError("protected_segments_count must be non-negative")

    def with_overrides(self, **overrides) -> "RoutingConfig":
        """
        Return a copy with some options replaced.

        Raises:
            TypeError: If an option name is not recognized.
            ConfigError: If a replaced value is invalid.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise TypeError(f"Unknown routing option(s): {', '.join(unknown)}")
        return replace(self, **overrides)


DEFAULT_CONFIG = RoutingConfig()
