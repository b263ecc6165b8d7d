"""
PathResult dataclass for pathfinding results.

Captures the path, its cost, and search statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
import math
import time

from .graph import NodeKey, format_key


@dataclass
class PathResult:
    """
    Result of a shortest-path query.

    A missing path is an ordinary outcome: path is empty, distance is
    infinite and path_exists is False.
    """
    path: List[NodeKey] = field(default_factory=list)
    distance: float = math.inf
    path_exists: bool = False

    # Search statistics
    nodes_explored: int = 0
    computation_time: float = 0.0
    path_length: int = 0

    def __post_init__(self):
        """Compute derived fields."""
        if self.path_length == 0:
            self.path_length = len(self.path)

    @classmethod
    def not_found(cls, **kwargs) -> "PathResult":
        return cls(path=[], distance=math.inf, path_exists=False, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": [format_key(k) for k in self.path],
            "distance": self.distance if math.isfinite(self.distance) else None,
            "path_exists": self.path_exists,
            "nodes_explored": self.nodes_explored,
        }

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Path Result",
            f"  Found: {self.path_exists}",
            f"  Path length: {self.path_length} nodes",
            f"  Distance: {self.distance:.2f}",
            f"  Nodes explored: {self.nodes_explored}",
            f"  Computation time: {self.computation_time:.3f}s",
        ]
        return '\n'.join(lines)


class Timer:
    """Simple context manager for timing operations."""

    def __init__(self):
        self.start_time = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed = time.perf_counter() - self.start_time
