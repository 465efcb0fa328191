"""Unit tests for routing configuration."""

import dataclasses

import pytest

from wireflow import config as config_module
from wireflow.config import DEFAULT_CONFIG, RoutingConfig
from wireflow.exceptions import ConfigError


class TestRoutingConfig:
    """Tests for RoutingConfig."""

    def test_defaults_match_module_constants(self):
        """Defaults come from the tuning constants."""
        cfg = RoutingConfig()
        assert cfg.extension_length == config_module.EXTENSION_LENGTH
        assert cfg.obstacle_padding == config_module.OBSTACLE_PADDING
        assert cfg.local_search_radius == config_module.LOCAL_SEARCH_RADIUS
        assert cfg.protected_segments_count == config_module.PROTECTED_SEGMENTS_COUNT
        assert cfg.clearance == config_module.CLEARANCE
        assert cfg.enable_collision_detection is True

    def test_default_config_instance(self):
        assert DEFAULT_CONFIG == RoutingConfig()

    def test_is_frozen(self):
        """Options cannot be changed in place."""
        cfg = RoutingConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.clearance = 5

    def test_with_overrides(self):
        """Overrides produce a new config and leave the original alone."""
        cfg = RoutingConfig()
        custom = cfg.with_overrides(clearance=5, enable_collision_detection=False)
        assert custom.clearance == 5
        assert custom.enable_collision_detection is False
        assert cfg.clearance == config_module.CLEARANCE

    def test_unknown_override(self):
        """Unrecognized option names are rejected."""
        with pytest.raises(TypeError, match="margin"):
            RoutingConfig().with_overrides(margin=3)

    def test_negative_distance(self):
        """Negative distances are invalid."""
        with pytest.raises(ConfigError, match="clearance"):
            RoutingConfig(clearance=-1)

    def test_negative_segment_count(self):
        """ConfigError is also a ValueError."""
        with pytest.raises(ValueError):
            RoutingConfig(protected_segments_count=-2)
