"""
Centrality metrics for proximity graphs.

This module ranks nodes by the reciprocal of the distance accumulated
during a breadth-first walk from each node. The walk attributes to each
node the distance along whichever queued path is dequeued first, which
is generally not the shortest path, so the score approximates closeness
centrality rather than computing it exactly.
"""

import logging
import math
from collections import deque
from typing import List, NamedTuple, Optional

from ..core.graph import ProximityGraph
from ..pipeline_config import CENTRALITY_CONFIG, CentralityError

logger = logging.getLogger(__name__)


class CentralityScore(NamedTuple):
    """A (node index, score) pair."""
    node: int
    score: float


def bfs_total_distance(graph: ProximityGraph, start_node: int) -> float:
    """
    Sum of traversal distances from a start node over its component.

    Breadth-first walk with a FIFO queue of (node, distance) pairs seeded
    with (start_node, 0.0). A node may be queued several times; the first
    time it is dequeued it is marked visited and its queued distance is
    added to the total, later copies are skipped.

    Edges are traversed in both directions and a node's neighbors are
    queued in adjacency order, which for builder-produced graphs is
    ascending node index.

    Args:
        graph: Graph to traverse
        start_node: Index of the starting node

    Returns:
        Total distance over the nodes reachable from start_node
    """
    if not graph.has_node(start_node):
        raise CentralityError(f"Node {start_node} is not in the graph")

    visited = set()
    queue = deque([(start_node, 0.0)])
    total_distance = 0.0

    while queue:
        current_node, distance = queue.popleft()
        if current_node in visited:
            continue

        visited.add(current_node)
        total_distance += distance

        for neighbor, weight in graph.edges(current_node):
            if neighbor not in visited:
                queue.append((neighbor, distance + weight))

    return total_distance


def _ranking_key(entry: CentralityScore):
    # NaN last, then score descending, then node ascending
    if math.isnan(entry.score):
        return (1, 0.0, entry.node)
    return (0, -entry.score, entry.node)


def rank_scores(scores: List[CentralityScore]) -> List[CentralityScore]:
    """Sort scores descending, ties by ascending node index, NaN last."""
    return sorted(scores, key=_ranking_key)


class CentralityAnalyzer:
    """Computes sampled traversal centrality over a ProximityGraph."""

    def __init__(self, graph: ProximityGraph):
        """
        Initialize the analyzer.

        Args:
            graph: Graph to analyze, treated as read-only
        """
        self.graph = graph

    def node_score(self, node: int) -> CentralityScore:
        """
        Score a single node.

        Args:
            node: Index of the node

        Returns:
            CentralityScore, 0.0 when the accumulated distance is zero
        """
        total_distance = bfs_total_distance(self.graph, node)
        score = 1.0 / total_distance if total_distance > 0.0 else 0.0
        return CentralityScore(node, score)

    def analyze(self, sample_size: Optional[int] = None) -> List[CentralityScore]:
        """
        Score the first sample_size nodes and rank them.

        Args:
            sample_size: Number of nodes, taken as a prefix of the index
                space; defaults to CENTRALITY_CONFIG

        Returns:
            Scores sorted descending
        """
        if sample_size is None:
            sample_size = CENTRALITY_CONFIG['sample_size']
        if sample_size < 0:
            raise CentralityError(f"Sample size must be non-negative, got {sample_size}")

        sample = range(min(sample_size, self.graph.node_count))
        scores = [self.node_score(node) for node in sample]

        logger.debug(f"Centrality computed for {len(scores)} of {self.graph.node_count} nodes")
        return rank_scores(scores)


def analyze_centrality(graph: ProximityGraph, sample_size: Optional[int] = None) -> List[CentralityScore]:
    """
    Rank the first sample_size nodes of a graph by traversal centrality.

    Args:
        graph: Graph to analyze
        sample_size: Number of nodes to analyze

    Returns:
        List of CentralityScore sorted by score descending
    """
    return CentralityAnalyzer(graph).analyze(sample_size)


def top_central_nodes(scores: List[CentralityScore], n: Optional[int] = None) -> List[CentralityScore]:
    """First n entries of a ranking (defaults to CENTRALITY_CONFIG['top_n'])."""
    if n is None:
        n = CENTRALITY_CONFIG['top_n']
    return list(scores[:n])


__all__ = ['CentralityScore', 'CentralityAnalyzer', 'bfs_total_distance',
           'analyze_centrality', 'rank_scores', 'top_central_nodes']
