"""
terrainpath - Terrain generation and heuristic pathfinding on grid graphs.

This module builds deterministic noise-weighted terrain graphs and searches
them with a best-first (A*-style) pathfinder, either in batch or with a
full step trace for animation.

Main API:
    - generate_graph: Build a terrain graph from (width, height, seed, detail)
    - find_shortest_path: Low-cost path between two cells
    - run_animated_search: Step-by-step trace of a search
    - reconstruct_path: Predecessor map to ordered path
    - PathResult: Dataclass for pathfinding results
    - TerrainGraph: Graph representation of the terrain

Example:
    >>> from terrainpath import generate_graph, find_shortest_path
    >>>
    >>> graph = generate_graph(60, 40, seed=42, detail=2.5)
    >>> result = find_shortest_path((0, 0), (25, 12), graph)
    >>>
    >>> print(result.summary())
"""

from .config import TerrainConfig, SearchConfig, DEFAULT_TERRAIN, DEFAULT_SEARCH

from .graph import (
    Node,
    NodeKey,
    TerrainGraph,
    generate_graph,
    uniform_graph,
    terrain_weight,
    node_key,
    format_key,
    parse_key,
)

from .heap import PriorityQueue
from .noise import PerlinNoise, SeededRandom
from .result import PathResult

from .search import (
    SearchOutcome,
    search_graph,
    search_graph_animated,
    reconstruct_path,
)

from .steps import (
    AnimationStep,
    InitStep,
    ExploreStep,
    CompleteStep,
    PathProgressStep,
    path_progress_steps,
)

from .surface import find_shortest_path, run_animated_search

from .scenario import CycleResult, pick_endpoints, random_terrain_parameters, run_cycle
from .worker import SearchWorker, handle_message

__all__ = [
    # Main API
    'generate_graph',
    'find_shortest_path',
    'run_animated_search',
    'reconstruct_path',

    # Result type
    'PathResult',

    # Graph types
    'TerrainGraph',
    'Node',
    'NodeKey',
    'uniform_graph',
    'terrain_weight',
    'node_key',
    'format_key',
    'parse_key',

    # Search internals
    'PriorityQueue',
    'PerlinNoise',
    'SeededRandom',
    'SearchOutcome',
    'search_graph',
    'search_graph_animated',

    # Animation
    'AnimationStep',
    'InitStep',
    'ExploreStep',
    'CompleteStep',
    'PathProgressStep',
    'path_progress_steps',

    # Scenarios
    'CycleResult',
    'pick_endpoints',
    'random_terrain_parameters',
    'run_cycle',

    # Worker
    'SearchWorker',
    'handle_message',

    # Config
    'TerrainConfig',
    'SearchConfig',
    'DEFAULT_TERRAIN',
    'DEFAULT_SEARCH',
]
