"""
Heuristic best-first search over a TerrainGraph.

Two modes share the same relaxation rule (stepping onto a cell costs that
cell's weight) and the same heuristic (Manhattan distance scaled by 0.8):

- search_graph: batch mode. Prunes nodes far from the start and caps the
  number of expansions, then returns the cost and predecessor maps.
- search_graph_animated: records an Init/Explore/Complete trace of every
  expansion for playback.

Terrain weights go down to 0.1, so the scaled Manhattan heuristic can
overestimate the remaining cost. Results are the cheapest path among the
nodes the search explored, not a certified optimum.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set
import logging
import math

from .config import SearchConfig, DEFAULT_SEARCH
from .graph import NodeKey, TerrainGraph
from .heap import PriorityQueue
from .steps import AnimationStep, CompleteStep, ExploreStep, InitStep

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Final state of a batch search."""
    distances: Dict[NodeKey, float] = field(default_factory=dict)
    previous: Dict[NodeKey, NodeKey] = field(default_factory=dict)
    nodes_explored: int = 0
    reached_goal: bool = False

    def distance_to(self, key: NodeKey) -> float:
        return self.distances.get(key, math.inf)


def manhattan(a: NodeKey, b: NodeKey) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def heuristic(key: NodeKey, goal: NodeKey, config: SearchConfig = DEFAULT_SEARCH) -> float:
    """Scaled Manhattan distance to the goal."""
    return manhattan(key, goal) * config.heuristic_scale


def exploration_budget(node_count: int, config: SearchConfig = DEFAULT_SEARCH) -> float:
    """
    Maximum expansions for a batch search over node_count nodes.

    Half the graph, capped at max_nodes_explored, and never below
    min_exploration_budget so small grids can still be crossed.
    """
    budget = max(node_count * config.explored_fraction, config.min_exploration_budget)
    return min(config.max_nodes_explored, budget)


def reconstruct_path(
    previous: Dict[NodeKey, Optional[NodeKey]],
    start: NodeKey,
    end: NodeKey
) -> List[NodeKey]:
    """
    Walk predecessor links back from end.

    Args:
        previous: Predecessor of each reached node
        start: Expected first node
        end: Node to walk back from

    Returns:
        Keys from start to end inclusive, or [] if the chain does not
        begin at start
    """
    path: List[NodeKey] = []
    limit = len(previous) + 1
    current: Optional[NodeKey] = end
    while current is not None:
        path.append(current)
        if len(path) > limit:
            # predecessor cycle
            return []
        current = previous.get(current)

    path.reverse()
    if path and path[0] == start:
        return path
    return []


def search_graph(
    start: NodeKey,
    end: NodeKey,
    graph: TerrainGraph,
    config: Optional[SearchConfig] = None
) -> SearchOutcome:
    """
    Batch best-first search from start toward end.

    Only nodes within search_radius_factor x the start-goal Manhattan
    distance of the start are considered, and expansions stop at
    exploration_budget(). Once the search is within near_goal_distance of
    the goal after near_goal_min_explored expansions, the remaining budget
    shrinks to near_goal_extension more expansions.

    Args:
        start: Start key (must be in graph)
        end: Goal key (must be in graph)
        graph: Graph to search
        config: Search parameters

    Returns:
        SearchOutcome with g-costs and predecessors; the path is not
        reconstructed here
    """
    config = config or DEFAULT_SEARCH

    if start not in graph or end not in graph:
        return SearchOutcome()

    radius = manhattan(start, end) * config.search_radius_factor

    g_cost: Dict[NodeKey, float] = {}
    for key in graph.nodes:
        if manhattan(key, start) > radius:
            continue
        g_cost[key] = math.inf
    g_cost[start] = 0.0

    previous: Dict[NodeKey, NodeKey] = {}
    closed: Set[NodeKey] = set()
    open_set = PriorityQueue()
    open_set.push(start, heuristic(start, end, config))

    budget = exploration_budget(graph.node_count, config)
    explored = 0
    reached = False

    while not open_set.is_empty() and explored < budget:
        current = open_set.pop().element

        if current in closed:
            continue
        closed.add(current)
        explored += 1

        if current == end:
            reached = True
            break

        if (manhattan(current, end) <= config.near_goal_distance
                and explored > config.near_goal_min_explored):
            budget = min(budget, explored + config.near_goal_extension)

        for neighbor in graph.neighbors(current):
            if neighbor in closed or neighbor not in g_cost:
                continue
            tentative_g = g_cost[current] + graph.weight_of(neighbor)
            if tentative_g < g_cost[neighbor]:
                previous[neighbor] = current
                g_cost[neighbor] = tentative_g
                open_set.push(neighbor, tentative_g + heuristic(neighbor, end, config))

    if not reached:
        logger.debug(
            f"search_graph: stopped before {end} (explored={explored}, "
            f"budget={budget}, queue_empty={open_set.is_empty()})"
        )

    return SearchOutcome(
        distances=g_cost,
        previous=previous,
        nodes_explored=explored,
        reached_goal=reached,
    )


def _rebuild_by_heuristic(
    open_set: PriorityQueue,
    closed: Set[NodeKey],
    end: NodeKey,
    config: SearchConfig
) -> None:
    """Re-key every still-open entry purely by its heuristic."""
    pending = []
    seen: Set[NodeKey] = set()
    for key in open_set.elements():
        if key in closed or key in seen:
            continue
        seen.add(key)
        pending.append(key)

    open_set.clear()
    for key in pending:
        open_set.push(key, heuristic(key, end, config))


def search_graph_animated(
    start: NodeKey,
    end: NodeKey,
    graph: TerrainGraph,
    config: Optional[SearchConfig] = None
) -> List[AnimationStep]:
    """
    Best-first search that records every expansion.

    The trace opens with an InitStep, adds one ExploreStep per newly closed
    node (with the path that reached it), and ends with a CompleteStep when
    the goal is expanded. The whole trace, Complete included, holds at most
    max_animation_steps entries; a trace without a CompleteStep means the
    queue or step budget ran out first.

    With config.rebuild_near_goal set, the open set is re-keyed by heuristic
    alone once the search is near the goal. That discards accumulated costs
    and biases the rest of the search, so it is off by default.

    Args:
        start: Start key (must be in graph)
        end: Goal key (must be in graph)
        graph: Graph to search
        config: Search parameters

    Returns:
        Ordered list of animation steps
    """
    config = config or DEFAULT_SEARCH

    if start not in graph or end not in graph:
        return []

    g_cost: Dict[NodeKey, float] = {key: math.inf for key in graph.nodes}
    g_cost[start] = 0.0
    previous: Dict[NodeKey, NodeKey] = {}
    closed: Set[NodeKey] = set()

    open_set = PriorityQueue()
    open_set.push(start, heuristic(start, end, config))

    steps: List[AnimationStep] = [InitStep(current=start)]
    last_visited = 0
    # room for the closing CompleteStep
    limit = config.max_animation_steps - 1

    while not open_set.is_empty() and len(steps) < limit:
        current = open_set.pop().element

        if current in closed:
            continue
        closed.add(current)

        current_path = reconstruct_path(previous, start, current)
        steps.append(ExploreStep(
            current=current,
            visited_count=len(closed),
            newly_visited_count=len(closed) - last_visited,
            current_path=current_path if current_path else [start],
        ))
        last_visited = len(closed)

        if current == end:
            steps.append(CompleteStep(
                current=current,
                visited_count=len(closed),
                current_path=current_path,
            ))
            break

        if (config.rebuild_near_goal
                and manhattan(current, end) <= config.near_goal_distance
                and len(closed) > config.near_goal_min_explored):
            _rebuild_by_heuristic(open_set, closed, end, config)

        for neighbor in graph.neighbors(current):
            if neighbor in closed:
                continue
            tentative_g = g_cost[current] + graph.weight_of(neighbor)
            if tentative_g < g_cost[neighbor]:
                previous[neighbor] = current
                g_cost[neighbor] = tentative_g
                open_set.push(neighbor, tentative_g + heuristic(neighbor, end, config))

    logger.debug(
        f"search_graph_animated: {len(steps)} steps, visited={len(closed)}, "
        f"complete={isinstance(steps[-1], CompleteStep)}"
    )
    return steps
