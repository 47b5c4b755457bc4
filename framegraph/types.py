"""
Reference Frame Graph - Type Definitions

TypedDict definitions for structured return types.
"""

from typing import List, TypedDict


class PathReport(TypedDict):
    """Return type for FrameGraph.describe_path()."""
    frames: List  # Frames visited, source first, target last
    factories: List  # Edge factories in application order
    costs: List[float]  # Cost of each edge at the query epoch
    total_cost: float  # Sum of costs
