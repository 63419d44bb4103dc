"""
Tests for traversal centrality.
"""

import math

import pytest

from rent_graph.core.graph import ProximityGraph
from rent_graph.pipeline.graph_builder import construct_graph
from rent_graph.pipeline.metrics import (
    CentralityAnalyzer,
    CentralityScore,
    analyze_centrality,
    bfs_total_distance,
    rank_scores,
    top_central_nodes,
)
from rent_graph.pipeline_config import CentralityError
from rent_graph.utils.geometry import haversine_distance

# =============================================================================
# bfs_total_distance
# =============================================================================


class TestBfsTotalDistance:
    """Tests for the breadth-first accumulation."""

    def test_chain_from_end(self, chain_graph):
        # A:0 + B:5 + C:12
        assert bfs_total_distance(chain_graph, 0) == pytest.approx(17.0)

    def test_chain_from_middle(self, chain_graph):
        assert bfs_total_distance(chain_graph, 1) == pytest.approx(12.0)

    def test_chain_from_other_end(self, chain_graph):
        # C:0 + B:7 + A:12
        assert bfs_total_distance(chain_graph, 2) == pytest.approx(19.0)

    def test_first_dequeued_distance_wins(self, detour_graph):
        # 0:0, 1:1, 2:10 (direct edge dequeued before 0-1-3-2), 3:2
        assert bfs_total_distance(detour_graph, 0) == pytest.approx(13.0)

    def test_not_shortest_path_on_triangle(self):
        graph = ProximityGraph()
        for _ in range(3):
            graph.add_node((0.0, 0.0))
        graph.add_edge(0, 1, 10.0)
        graph.add_edge(0, 2, 1.0)
        graph.add_edge(1, 2, 1.0)

        # Node 1 is dequeued at 10.0 although 0-2-1 costs 2.0
        assert bfs_total_distance(graph, 0) == pytest.approx(11.0)

    def test_isolated_node(self):
        graph = ProximityGraph()
        graph.add_node((0.0, 0.0))
        assert bfs_total_distance(graph, 0) == 0.0

    def test_only_reachable_component_counts(self, chain_graph):
        chain_graph.add_node((0.0, 0.0))
        d = chain_graph.add_node((0.0, 0.001))
        chain_graph.add_edge(d - 1, d, 100.0)
        assert bfs_total_distance(chain_graph, 0) == pytest.approx(17.0)

    def test_positive_on_dubai_graph(self, dubai_properties):
        graph = construct_graph(dubai_properties)
        for node in graph.node_indices():
            assert bfs_total_distance(graph, node) > 0.0

    def test_dubai_graph_from_first_node(self, dubai_properties, dubai_coordinates):
        graph = construct_graph(dubai_properties)
        d01 = haversine_distance(dubai_coordinates[0], dubai_coordinates[1])
        d12 = haversine_distance(dubai_coordinates[1], dubai_coordinates[2])
        assert bfs_total_distance(graph, 0) == pytest.approx(d01 + (d01 + d12))

    def test_unknown_start_node(self, chain_graph):
        with pytest.raises(CentralityError):
            bfs_total_distance(chain_graph, 42)


# =============================================================================
# analyze_centrality
# =============================================================================


class TestAnalyzeCentrality:
    """Tests for ranking."""

    def test_chain_ranking(self, chain_graph):
        results = analyze_centrality(chain_graph, 3)

        assert [r.node for r in results] == [1, 0, 2]
        assert results[0].score == pytest.approx(1.0 / 12.0)
        assert results[1].score == pytest.approx(1.0 / 17.0)
        assert results[2].score == pytest.approx(1.0 / 19.0)

    def test_dubai_scenario(self, dubai_properties):
        graph = construct_graph(dubai_properties)
        results = analyze_centrality(graph, 3)
        assert len(results) == 3
        assert results[0].score > 0.0

    def test_sample_is_prefix_of_indices(self, chain_graph):
        results = analyze_centrality(chain_graph, 2)
        assert sorted(r.node for r in results) == [0, 1]

    @pytest.mark.parametrize("k", [0, 1, 2, 3, 10])
    def test_sample_bound(self, chain_graph, k):
        assert len(analyze_centrality(chain_graph, k)) == min(k, chain_graph.node_count)

    def test_empty_graph(self):
        assert analyze_centrality(ProximityGraph(), 5) == []

    def test_single_node_scores_zero(self):
        graph = ProximityGraph()
        graph.add_node((1.0, 1.0))
        assert analyze_centrality(graph, 1) == [CentralityScore(0, 0.0)]

    def test_isolated_nodes_score_exactly_zero(self, chain_graph):
        chain_graph.add_node((0.0, 0.0))
        results = analyze_centrality(chain_graph, 4)
        assert results[-1] == CentralityScore(3, 0.0)
        assert all(r.score >= 0.0 for r in results)

    def test_descending_order(self):
        records = [{"latitude": 25.0 + 0.01 * i, "longitude": 55.0 + 0.007 * (i % 3)} for i in range(15)]
        graph = construct_graph(records, radius_km=3.0)
        results = analyze_centrality(graph, 15)
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_ties_broken_by_node_index(self):
        graph = ProximityGraph()
        for _ in range(4):
            graph.add_node((0.0, 0.0))
        graph.add_edge(2, 3, 2.0)
        results = analyze_centrality(graph, 4)
        assert results == [CentralityScore(2, 0.5), CentralityScore(3, 0.5),
                           CentralityScore(0, 0.0), CentralityScore(1, 0.0)]

    def test_negative_sample_size(self, chain_graph):
        with pytest.raises(CentralityError):
            analyze_centrality(chain_graph, -1)

    def test_default_sample_size(self, chain_graph):
        assert len(analyze_centrality(chain_graph)) == 3

    def test_results_are_tuples(self, chain_graph):
        node, score = analyze_centrality(chain_graph, 1)[0]
        assert node == 0
        assert score == pytest.approx(1.0 / 17.0)

    def test_graph_not_modified(self, chain_graph):
        analyze_centrality(chain_graph, 3)
        assert chain_graph.node_count == 3
        assert chain_graph.edge_count == 2


class TestRanking:
    """Tests for ordering helpers."""

    def test_nan_sorts_last(self):
        scores = [CentralityScore(0, math.nan), CentralityScore(1, 0.5), CentralityScore(2, 0.0)]
        ranked = rank_scores(scores)
        assert [s.node for s in ranked] == [1, 2, 0]

    def test_top_central_nodes(self, chain_graph):
        ranking = CentralityAnalyzer(chain_graph).analyze(3)
        assert top_central_nodes(ranking, 2) == ranking[:2]
        assert len(top_central_nodes(ranking)) == 3

    def test_node_score(self, chain_graph):
        assert CentralityAnalyzer(chain_graph).node_score(1) == CentralityScore(1, pytest.approx(1.0 / 12.0))
