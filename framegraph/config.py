"""
Reference Frame Graph - Configuration

This module provides a GraphConfig dataclass for dependency injection,
allowing a FrameGraph to be tuned (cost policy, caching, logging) without
modifying global constants.
"""

from dataclasses import dataclass

NEGATIVE_COST_POLICIES = ("raise", "bellman_ford")


@dataclass(frozen=True)
class GraphConfig:
    """
    Immutable configuration for a FrameGraph.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Path search
      2. Caching
      3. Misc
    """

    # ── 1. Path search ───────────────────────────────────────────────────
    # "raise": a negative/NaN edge cost aborts the query (Dijkstra only).
    # "bellman_ford": every query runs Bellman-Ford over the edges reachable
    # from the source; negative costs are accepted, negative cycles abort.
    negative_cost_policy: str = "raise"

    # ── 2. Caching ───────────────────────────────────────────────────────
    # Keyed by (from, to, epoch); cleared on every graph mutation.
    cache_transforms: bool = False
    max_cache_entries: int = 1024

    # ── 3. Misc ──────────────────────────────────────────────────────────
    # Log selected paths at INFO instead of DEBUG
    verbose: bool = False

    def __post_init__(self):
        if self.negative_cost_policy not in NEGATIVE_COST_POLICIES:
            raise ValueError(
                f"negative_cost_policy must be one of {NEGATIVE_COST_POLICIES}, "
                f"got {self.negative_cost_policy!r}"
            )
        if self.max_cache_entries < 1:
            raise ValueError(
                f"max_cache_entries must be positive, got {self.max_cache_entries}"
            )


def create_default_config() -> GraphConfig:
    """Create a GraphConfig with default values."""
    return GraphConfig()


def create_test_config(**overrides) -> GraphConfig:
    """Create a config suitable for testing.

    Any keyword arg accepted by GraphConfig can be passed as an override.
    """
    defaults = dict(verbose=False)
    defaults.update(overrides)
    return GraphConfig(**defaults)
