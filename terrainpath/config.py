"""
Tunable constants for terrain generation and search.

Defaults reproduce the reference terrain and search budgets exactly; change
them only through a new config instance so golden outputs stay comparable.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TerrainConfig:
    """
    Noise, road and floor parameters for the terrain graph builder.

    The four weight bands are fixed in terrain_weight(); their thresholds
    and slopes only make sense together.
    """

    # Terrain layer
    octaves: int = 4
    persistence: float = 0.6
    scale_factor: float = 0.05  # multiplied by detail

    # Road layer
    road_octaves: int = 2
    road_persistence: float = 0.5
    road_scale_factor: float = 0.1  # multiplied by detail
    road_coordinate_scale: float = 0.03
    road_threshold: float = 0.05
    road_weight: float = 0.3

    min_weight: float = 0.1


@dataclass(frozen=True)
class SearchConfig:
    """Heuristic and budget parameters for both search modes."""

    heuristic_scale: float = 0.8

    # Batch mode
    search_radius_factor: float = 1.5
    max_nodes_explored: int = 1000
    explored_fraction: float = 0.5
    min_exploration_budget: int = 64

    # Near-goal rule (both modes)
    near_goal_distance: int = 3
    near_goal_min_explored: int = 50
    near_goal_extension: int = 100

    # Animated mode
    max_animation_steps: int = 1500
    rebuild_near_goal: bool = False


DEFAULT_TERRAIN = TerrainConfig()
DEFAULT_SEARCH = SearchConfig()
