"""
Terrain Pathfinding - High-level API over generated terrain graphs.

This is the integration point between terrain generation and search.
"""

from typing import List, Optional, Union
import logging

from .config import SearchConfig
from .graph import NodeKey, TerrainGraph, as_key
from .result import PathResult, Timer
from .search import reconstruct_path, search_graph, search_graph_animated
from .steps import AnimationStep

logger = logging.getLogger(__name__)

KeyLike = Union[str, NodeKey]


def find_shortest_path(
    start: KeyLike,
    end: KeyLike,
    graph: TerrainGraph,
    config: Optional[SearchConfig] = None
) -> PathResult:
    """
    Find a low-cost path between two cells.

    Args:
        start: Start key, (x, y) or "x,y"
        end: Goal key, (x, y) or "x,y"
        graph: Terrain graph to search
        config: Search parameters

    Returns:
        PathResult; path_exists is False when either key is absent or the
        search stopped before reaching the goal

    Example:
        >>> graph = generate_graph(64, 48, seed=3)
        >>> result = find_shortest_path((2, 2), (20, 9), graph)
        >>> print(result.summary())
    """
    start_key = as_key(start)
    end_key = as_key(end)

    if start_key not in graph or end_key not in graph:
        logger.debug(f"find_shortest_path: endpoint missing ({start_key} -> {end_key})")
        return PathResult.not_found()

    if start_key == end_key:
        return PathResult(path=[start_key], distance=0.0, path_exists=True)

    with Timer() as timer:
        outcome = search_graph(start_key, end_key, graph, config)
        path = reconstruct_path(outcome.previous, start_key, end_key)

    return PathResult(
        path=path,
        distance=outcome.distance_to(end_key),
        path_exists=len(path) > 0,
        nodes_explored=outcome.nodes_explored,
        computation_time=timer.elapsed,
    )


def run_animated_search(
    start: KeyLike,
    end: KeyLike,
    graph: TerrainGraph,
    config: Optional[SearchConfig] = None
) -> List[AnimationStep]:
    """
    Run the animated search and return its full step trace.

    Args:
        start: Start key, (x, y) or "x,y"
        end: Goal key, (x, y) or "x,y"
        graph: Terrain graph to search
        config: Search parameters

    Returns:
        List of steps; empty when either key is absent from the graph
    """
    start_key = as_key(start)
    end_key = as_key(end)

    if start_key not in graph or end_key not in graph:
        logger.warning(f"run_animated_search: endpoint missing ({start_key} -> {end_key})")
        return []

    return search_graph_animated(start_key, end_key, graph, config)
