"""Tests for config module."""
import dataclasses

import pytest

from framegraph import FrameGraph, config


def test_graph_config_defaults():
    """Test the default cost policy, cache and logging settings."""
    cfg = config.GraphConfig()
    assert cfg.negative_cost_policy == "raise"
    assert cfg.cache_transforms is False
    assert cfg.max_cache_entries == 1024
    assert cfg.verbose is False


def test_graph_config_custom_values():
    """Test creating config with custom values."""
    cfg = config.GraphConfig(negative_cost_policy="bellman_ford", cache_transforms=True,
                             max_cache_entries=8, verbose=True)
    assert cfg.negative_cost_policy == "bellman_ford"
    assert cfg.cache_transforms is True
    assert cfg.max_cache_entries == 8
    assert cfg.verbose is True


def test_graph_config_frozen():
    """Test that config is immutable (frozen)."""
    cfg = config.GraphConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.verbose = True


def test_graph_config_replace():
    cfg = dataclasses.replace(config.GraphConfig(), cache_transforms=True)
    assert cfg.cache_transforms is True
    assert cfg.negative_cost_policy == "raise"


def test_graph_config_rejects_unknown_policy():
    with pytest.raises(ValueError):
        config.GraphConfig(negative_cost_policy="ignore")


def test_graph_config_rejects_empty_cache():
    with pytest.raises(ValueError):
        config.GraphConfig(max_cache_entries=0)


def test_create_default_config():
    """Test create_default_config factory function."""
    cfg = config.create_default_config()
    assert isinstance(cfg, config.GraphConfig)
    assert cfg == config.GraphConfig()


def test_create_test_config():
    """Test create_test_config factory function."""
    cfg = config.create_test_config()
    assert cfg.verbose is False


def test_create_test_config_custom():
    """Test create_test_config with custom parameters."""
    cfg = config.create_test_config(cache_transforms=True, max_cache_entries=4)
    assert cfg.cache_transforms is True
    assert cfg.max_cache_entries == 4


def test_graph_uses_default_config():
    graph = FrameGraph()
    assert graph.config == config.create_default_config()
