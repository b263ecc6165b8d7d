"""
TerrainGraph - Noise-weighted grid graph for pathfinding.

Wraps a width x height grid as a graph where:
- Nodes are cells keyed by their (x, y) coordinates
- Edges connect orthogonal neighbors (4-connectivity, no diagonals)
- Node weight is the cost multiplier for stepping onto that cell

Weights come from fractal noise banded into valleys, rolling hills, hills
and mountains, with a sparse road network of cheap cells laid over the top.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union
import numpy as np

from .config import TerrainConfig, DEFAULT_TERRAIN
from .noise import PerlinNoise

NodeKey = Tuple[int, int]  # (x, y)

# left, right, up, down
_OFFSETS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def node_key(x: int, y: int) -> NodeKey:
    """Canonical key for cell (x, y)."""
    return (int(x), int(y))


def format_key(key: NodeKey) -> str:
    """Render a key as "x,y" text for message payloads."""
    return f"{key[0]},{key[1]}"


def parse_key(text: str) -> NodeKey:
    """
    Parse "x,y" text into a key.

    Raises:
        ValueError: If text is not two comma-separated integers
    """
    parts = text.split(',')
    if len(parts) != 2:
        raise ValueError(f"Malformed node key: {text!r}")
    try:
        return node_key(int(parts[0]), int(parts[1]))
    except ValueError:
        raise ValueError(f"Malformed node key: {text!r}") from None


def as_key(value: Union[str, NodeKey, List[int]]) -> NodeKey:
    """Normalize "x,y" text or an (x, y) pair into a key."""
    if isinstance(value, str):
        return parse_key(value)
    x, y = value
    return node_key(x, y)


@dataclass(frozen=True)
class Node:
    """A grid cell with its movement cost multiplier."""
    x: int
    y: int
    weight: float

    @property
    def key(self) -> NodeKey:
        return (self.x, self.y)


def terrain_weight(
    noise_value: float,
    road_value: float,
    config: TerrainConfig = DEFAULT_TERRAIN
) -> float:
    """
    Map terrain and road noise samples to a cell weight.

    Bands (linear within each):
        n < -0.3         valleys
        -0.3 <= n < 0.1  rolling hills
        0.1 <= n < 0.4   hills
        n >= 0.4         mountains

    Args:
        noise_value: Terrain fractal noise at the cell
        road_value: Road fractal noise at the cell
        config: Road and floor parameters

    Returns:
        Weight, never below config.min_weight
    """
    n = noise_value
    if n < -0.3:
        weight = 0.1 + (n + 0.3) * 0.5
    elif n < 0.1:
        weight = 0.5 + n * 2.5
    elif n < 0.4:
        weight = 2.0 + (n - 0.1) * 10
    else:
        weight = 8.0 + (n - 0.4) * 28.33

    if abs(road_value) < config.road_threshold:
        weight = min(weight, config.road_weight)

    return max(config.min_weight, weight)


class TerrainGraph:
    """
    Immutable grid graph with per-node terrain weights.

    Build with generate_graph() or uniform_graph(); the node and edge maps
    are read-only views and never change after construction.
    """

    def __init__(
        self,
        width: int,
        height: int,
        nodes: Dict[NodeKey, Node],
        edges: Dict[NodeKey, Tuple[NodeKey, ...]],
        seed: Optional[int] = None,
        detail: Optional[float] = None
    ):
        self.width = width
        self.height = height
        self.seed = seed
        self.detail = detail
        self.nodes: Mapping[NodeKey, Node] = MappingProxyType(dict(nodes))
        self.edges: Mapping[NodeKey, Tuple[NodeKey, ...]] = MappingProxyType(dict(edges))

    def __contains__(self, key: NodeKey) -> bool:
        return key in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[NodeKey]:
        return iter(self.nodes)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def neighbors(self, key: NodeKey) -> Tuple[NodeKey, ...]:
        """Orthogonal neighbors of a node (empty for unknown keys)."""
        return self.edges.get(key, ())

    def weight_of(self, key: NodeKey) -> float:
        return self.nodes[key].weight

    def weight_array(self) -> np.ndarray:
        """
        Weights as a (height, width) float32 array indexed [y, x].
        """
        arr = np.zeros((max(self.height, 0), max(self.width, 0)), dtype=np.float32)
        for node in self.nodes.values():
            arr[node.y, node.x] = node.weight
        return arr

    def normalized_weights(self) -> np.ndarray:
        """
        Weights rescaled to [0, 1] (0 = easiest, 1 = hardest).

        A flat field maps to all zeros.
        """
        arr = self.weight_array()
        if arr.size == 0:
            return arr
        w_min = arr.min()
        w_max = arr.max()
        if w_max > w_min:
            return np.clip((arr - w_min) / (w_max - w_min), 0.0, 1.0)
        return np.zeros_like(arr)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form with "x,y" keys, suitable for JSON."""
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "detail": self.detail,
            "nodes": [
                [format_key(k), {"x": n.x, "y": n.y, "weight": n.weight}]
                for k, n in self.nodes.items()
            ],
            "edges": [
                [format_key(k), [format_key(nb) for nb in nbs]]
                for k, nbs in self.edges.items()
            ],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TerrainGraph":
        nodes: Dict[NodeKey, Node] = {}
        for key_text, data in d.get("nodes", []):
            key = parse_key(key_text)
            nodes[key] = Node(key[0], key[1], float(data["weight"]))

        edges: Dict[NodeKey, Tuple[NodeKey, ...]] = {}
        for key_text, neighbor_texts in d.get("edges", []):
            edges[parse_key(key_text)] = tuple(parse_key(t) for t in neighbor_texts)

        return cls(
            width=int(d.get("width", 0)),
            height=int(d.get("height", 0)),
            nodes=nodes,
            edges=edges,
            seed=d.get("seed"),
            detail=d.get("detail"),
        )


def _grid_edges(width: int, height: int) -> Dict[NodeKey, Tuple[NodeKey, ...]]:
    edges: Dict[NodeKey, Tuple[NodeKey, ...]] = {}
    for x in range(width):
        for y in range(height):
            connections = []
            for dx, dy in _OFFSETS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    connections.append((nx, ny))
            edges[(x, y)] = tuple(connections)
    return edges


def generate_graph(
    width: int,
    height: int,
    seed: int = 42,
    detail: float = 1.0,
    config: Optional[TerrainConfig] = None
) -> TerrainGraph:
    """
    Generate a terrain graph from seeded fractal noise.

    Args:
        width: Grid width (cells along x)
        height: Grid height (cells along y)
        seed: Noise seed; same seed and detail give identical weights
        detail: Noise scale multiplier, larger means busier terrain
        config: Terrain parameters (defaults reproduce reference terrain)

    Returns:
        TerrainGraph (empty for non-positive dimensions)

    Example:
        >>> graph = generate_graph(40, 30, seed=7, detail=2.0)
        >>> graph.weight_of((0, 0)) >= 0.1
        True
    """
    config = config or DEFAULT_TERRAIN
    perlin = PerlinNoise(seed)

    terrain_scale = detail * config.scale_factor
    road_scale = detail * config.road_scale_factor
    road_coord = config.road_coordinate_scale

    nodes: Dict[NodeKey, Node] = {}
    for x in range(width):
        for y in range(height):
            n = perlin.fractal_noise(x, y, config.octaves, config.persistence, terrain_scale)
            road = perlin.fractal_noise(
                x * road_coord, y * road_coord,
                config.road_octaves, config.road_persistence, road_scale
            )
            nodes[(x, y)] = Node(x, y, terrain_weight(n, road, config))

    return TerrainGraph(
        width=width,
        height=height,
        nodes=nodes,
        edges=_grid_edges(width, height),
        seed=seed,
        detail=detail,
    )


def uniform_graph(width: int, height: int, weight: float = 1.0) -> TerrainGraph:
    """Grid graph where every cell has the same weight."""
    nodes = {
        (x, y): Node(x, y, weight)
        for x in range(width)
        for y in range(height)
    }
    return TerrainGraph(width, height, nodes, _grid_edges(width, height))
