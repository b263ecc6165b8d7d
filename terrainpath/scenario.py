"""
Random pathfinding scenarios: fresh terrain plus a far-apart start and goal.

Used to drive an endless demo loop. Each cycle draws new terrain
parameters, picks endpoints (preferring the grid border so paths cross the
map), solves, and replays the result as path-progress steps. Cycles whose
terrain yields no path are retried with new terrain.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging
import numpy as np

from .config import SearchConfig
from .graph import NodeKey, TerrainGraph, generate_graph
from .result import PathResult
from .search import manhattan
from .steps import PathProgressStep, path_progress_steps
from .surface import find_shortest_path

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """One solved (or abandoned) scenario."""
    seed: int
    detail: float
    start: NodeKey
    end: NodeKey
    graph: TerrainGraph
    result: PathResult
    steps: List[PathProgressStep] = field(default_factory=list)
    attempts: int = 1


def random_terrain_parameters(rng: np.random.Generator) -> Tuple[int, float]:
    """
    Draw terrain parameters.

    Returns:
        (seed in [1, 1000], detail in [1.0, 6.0))
    """
    seed = int(rng.integers(1, 1001))
    detail = 1.0 + float(rng.random()) * 5.0
    return seed, detail


def border_cells(width: int, height: int) -> List[NodeKey]:
    """Cells on the grid border, corners listed once."""
    cells: List[NodeKey] = []
    for x in range(width):
        cells.append((x, 0))
    if height > 1:
        for x in range(width):
            cells.append((x, height - 1))
    for y in range(1, height - 1):
        cells.append((0, y))
    if width > 1:
        for y in range(1, height - 1):
            cells.append((width - 1, y))
    return cells


def pick_endpoints(
    width: int,
    height: int,
    rng: np.random.Generator,
    min_distance: int = 50,
    max_attempts: int = 100
) -> Tuple[NodeKey, NodeKey]:
    """
    Pick a start and goal at least min_distance apart (Manhattan).

    The first 80% of attempts sample from the border, the rest from any
    cell. If no pair qualifies, opposite corners are returned.

    Args:
        width: Grid width
        height: Grid height
        rng: Random generator
        min_distance: Minimum Manhattan distance between the two
        max_attempts: Sampling attempts before falling back

    Returns:
        (start, goal) keys
    """
    edge_points = border_cells(width, height)
    border_attempts = max_attempts * 0.8

    for attempt in range(max_attempts):
        if attempt < border_attempts and edge_points:
            start = edge_points[int(rng.integers(len(edge_points)))]
            end = edge_points[int(rng.integers(len(edge_points)))]
        else:
            start = (int(rng.integers(width)), int(rng.integers(height)))
            end = (int(rng.integers(width)), int(rng.integers(height)))

        if manhattan(start, end) >= min_distance:
            return start, end

    return (0, 0), (width - 1, height - 1)


def run_cycle(
    width: int,
    height: int,
    rng: Optional[np.random.Generator] = None,
    max_attempts: int = 10,
    min_distance: int = 50,
    config: Optional[SearchConfig] = None
) -> CycleResult:
    """
    Generate terrain and endpoints until a path is found.

    Args:
        width: Grid width
        height: Grid height
        rng: Random generator (a fresh default_rng() when omitted)
        max_attempts: Terrain draws before giving up
        min_distance: Minimum start-goal distance
        config: Search parameters

    Returns:
        CycleResult of the first solved attempt, or of the last attempt
        (with result.path_exists False) if none succeeded
    """
    if rng is None:
        rng = np.random.default_rng()

    cycle = None
    for attempt in range(1, max_attempts + 1):
        seed, detail = random_terrain_parameters(rng)
        start, end = pick_endpoints(width, height, rng, min_distance=min_distance)
        graph = generate_graph(width, height, seed, detail)
        result = find_shortest_path(start, end, graph, config)

        cycle = CycleResult(
            seed=seed,
            detail=detail,
            start=start,
            end=end,
            graph=graph,
            result=result,
            steps=path_progress_steps(result.path) if result.path_exists else [],
            attempts=attempt,
        )
        if result.path_exists:
            return cycle

        logger.debug(f"run_cycle: no path for seed={seed} detail={detail:.2f} {start}->{end}, retrying")

    if cycle is None:
        raise ValueError(f"max_attempts must be positive, got {max_attempts}")
    return cycle
