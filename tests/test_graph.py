"""
Terrain graph builder tests.

Covers weight banding, determinism, the weight floor, edge symmetry and
bounds, non-square grids, and the plain-data round trip used by the worker.

Run with: pytest tests/test_graph.py -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import dataclasses
import numpy as np
import pytest

from terrainpath.config import TerrainConfig
from terrainpath.graph import (
    Node,
    TerrainGraph,
    as_key,
    format_key,
    generate_graph,
    parse_key,
    terrain_weight,
    uniform_graph,
)


# ============================================================
# Keys
# ============================================================

class TestNodeKeys:

    def test_format_and_parse(self):
        assert format_key((3, 14)) == "3,14"
        assert parse_key("3,14") == (3, 14)
        assert parse_key("-2,0") == (-2, 0)

    def test_as_key_accepts_both_forms(self):
        assert as_key("4,5") == as_key((4, 5)) == (4, 5)
        assert as_key([4, 5]) == (4, 5)

    @pytest.mark.parametrize("text", ["", "1", "1,2,3", "a,b", "1.5,2"])
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(ValueError):
            parse_key(text)


# ============================================================
# Weight banding
# ============================================================

# Road value far from zero so the road rule does not fire
NO_ROAD = 1.0


class TestTerrainWeight:
    """Four linear bands, road clamp and the 0.1 floor."""

    def test_rolling_hills_band(self):
        assert terrain_weight(0.0, NO_ROAD) == pytest.approx(0.5)
        assert terrain_weight(0.05, NO_ROAD) == pytest.approx(0.625)

    def test_hills_band(self):
        assert terrain_weight(0.1, NO_ROAD) == pytest.approx(2.0)
        assert terrain_weight(0.25, NO_ROAD) == pytest.approx(3.5)

    def test_mountain_band(self):
        assert terrain_weight(0.4, NO_ROAD) == pytest.approx(8.0)
        assert terrain_weight(0.5, NO_ROAD) == pytest.approx(10.833)
        assert terrain_weight(1.0, NO_ROAD) == pytest.approx(8.0 + 0.6 * 28.33)

    def test_valleys_hit_floor(self):
        """Deep valleys fall below 0.1 before the floor is applied."""
        assert terrain_weight(-0.5, NO_ROAD) == pytest.approx(0.1)
        assert terrain_weight(-0.3, NO_ROAD) == pytest.approx(0.1)

    def test_road_clamps_to_point_three(self):
        assert terrain_weight(0.5, 0.01) == pytest.approx(0.3)
        assert terrain_weight(0.5, -0.049) == pytest.approx(0.3)
        assert terrain_weight(0.5, 0.05) == pytest.approx(10.833)

    def test_road_does_not_raise_easy_terrain(self):
        assert terrain_weight(-0.4, 0.0) == pytest.approx(0.1)

    def test_config_moves_road_and_floor_only(self):
        """Band edges stay put under a custom config."""
        config = TerrainConfig(road_weight=1.0, road_threshold=0.2, min_weight=0.4)

        assert not hasattr(config, "hills_below")
        assert terrain_weight(0.1, NO_ROAD, config) == pytest.approx(2.0)
        assert terrain_weight(0.4, NO_ROAD, config) == pytest.approx(8.0)
        assert terrain_weight(0.5, 0.15, config) == pytest.approx(1.0)
        assert terrain_weight(-0.5, NO_ROAD, config) == pytest.approx(0.4)


# ============================================================
# Generation
# ============================================================

def edge_pairs(graph):
    return {(a, b) for a, nbs in graph.edges.items() for b in nbs}


class TestGenerateGraph:

    def test_deterministic(self):
        """Same (width, height, seed, detail) gives identical graphs."""
        a = generate_graph(24, 17, seed=42, detail=2.5)
        b = generate_graph(24, 17, seed=42, detail=2.5)

        assert dict(a.nodes) == dict(b.nodes)
        assert edge_pairs(a) == edge_pairs(b)

    @pytest.mark.parametrize("key,weight", [
        ((0, 0), 0.3),
        ((5, 5), 0.142416114511434),
        ((10, 3), 2.1888492660706533),
        ((17, 22), 0.6512544181690935),
        ((39, 29), 0.4090951414366239),
        ((25, 12), 0.1),
        ((33, 8), 0.4626191223368925),
        ((2, 27), 2.778743418810122),
        ((37, 18), 4.872094990904717),
    ])
    def test_reference_weights(self, key, weight):
        """Reference terrain for 40x30, seed 42, detail 2.5."""
        graph = generate_graph(40, 30, seed=42, detail=2.5)
        assert graph.weight_of(key) == pytest.approx(weight, rel=1e-9, abs=1e-12)

    def test_reference_heaviest_cell(self):
        graph = generate_graph(40, 30, seed=42, detail=2.5)
        heaviest = max(graph.nodes.values(), key=lambda n: n.weight)
        assert heaviest.key == (37, 18)

    def test_seed_changes_terrain(self):
        a = generate_graph(60, 60, seed=1, detail=4.0)
        b = generate_graph(60, 60, seed=2, detail=4.0)
        assert not np.array_equal(a.weight_array(), b.weight_array())

    @pytest.mark.parametrize("seed,detail", [(1, 1.0), (42, 3.7), (999, 6.0), (7, 0.2)])
    def test_weight_floor(self, seed, detail):
        graph = generate_graph(30, 30, seed=seed, detail=detail)
        weights = [n.weight for n in graph.nodes.values()]
        assert min(weights) >= 0.1, f"Weight below floor: {min(weights)}"

    @pytest.mark.parametrize("seed", [1, 42, 999])
    def test_origin_is_road(self, seed):
        """Noise is zero at (0, 0), which lands on the road network."""
        graph = generate_graph(5, 5, seed=seed)
        assert graph.weight_of((0, 0)) == pytest.approx(0.3)

    def test_terrain_is_varied(self):
        graph = generate_graph(60, 60, seed=42, detail=3.0)
        weights = graph.weight_array()
        assert weights.max() > weights.min()

    def test_node_count_non_square(self):
        graph = generate_graph(7, 3, seed=5)
        assert len(graph) == 21
        assert graph.width == 7 and graph.height == 3
        assert (6, 2) in graph
        assert (2, 6) not in graph

    def test_edges_symmetric_and_in_bounds(self):
        graph = generate_graph(9, 4, seed=13)
        pairs = edge_pairs(graph)

        for a, b in pairs:
            assert (b, a) in pairs, f"Edge {a}->{b} has no reverse"
            assert 0 <= b[0] < 9 and 0 <= b[1] < 4, f"Neighbor {b} out of bounds"
            assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1, "Only orthogonal edges allowed"

    def test_edge_count(self):
        """Directed edges: 2*(w-1)*h horizontal plus 2*w*(h-1) vertical."""
        w, h = 9, 4
        graph = generate_graph(w, h, seed=13)
        assert len(edge_pairs(graph)) == 2 * (w - 1) * h + 2 * w * (h - 1)

    def test_degrees(self):
        graph = generate_graph(5, 5, seed=3)
        assert len(graph.neighbors((0, 0))) == 2
        assert len(graph.neighbors((2, 0))) == 3
        assert len(graph.neighbors((2, 2))) == 4
        assert graph.neighbors((50, 50)) == ()

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-3, 4), (0, 0)])
    def test_empty_for_non_positive_dimensions(self, width, height):
        graph = generate_graph(width, height, seed=1)
        assert len(graph) == 0
        assert len(graph.edges) == 0

    def test_single_cell(self):
        graph = generate_graph(1, 1, seed=42)
        assert list(graph.nodes) == [(0, 0)]
        assert graph.neighbors((0, 0)) == ()


class TestTerrainGraphImmutability:

    def test_maps_are_read_only(self):
        graph = uniform_graph(3, 3)
        with pytest.raises(TypeError):
            graph.nodes[(0, 0)] = Node(0, 0, 5.0)
        with pytest.raises(TypeError):
            graph.edges[(0, 0)] = ()

    def test_nodes_are_frozen(self):
        graph = uniform_graph(2, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            graph.nodes[(0, 0)].weight = 9.0


# ============================================================
# Array views and serialization
# ============================================================

class TestGraphViews:

    def test_weight_array_layout(self):
        """Array is (height, width) and indexed [y, x]."""
        graph = generate_graph(6, 4, seed=21)
        arr = graph.weight_array()

        assert arr.shape == (4, 6)
        assert arr[3, 5] == pytest.approx(graph.weight_of((5, 3)))
        assert arr[0, 2] == pytest.approx(graph.weight_of((2, 0)))

    def test_normalized_weights_range(self):
        graph = generate_graph(60, 60, seed=42, detail=4.0)
        norm = graph.normalized_weights()

        assert norm.min() >= 0.0
        assert norm.max() <= 1.0
        assert norm.max() == pytest.approx(1.0)

    def test_normalized_flat_field(self):
        norm = uniform_graph(4, 3, weight=2.0).normalized_weights()
        assert np.all(norm == 0.0)

    def test_dict_round_trip(self):
        graph = generate_graph(5, 4, seed=77, detail=1.5)
        restored = TerrainGraph.from_dict(graph.to_dict())

        assert dict(restored.nodes) == dict(graph.nodes)
        assert dict(restored.edges) == dict(graph.edges)
        assert (restored.width, restored.height) == (5, 4)
        assert restored.seed == 77

    def test_dict_uses_text_keys(self):
        d = uniform_graph(2, 1).to_dict()
        assert d["nodes"][0][0] == "0,0"
        assert d["edges"][0] == ["0,0", ["1,0"]]
