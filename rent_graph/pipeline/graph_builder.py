"""
Construction of proximity graphs from geolocated listings.

This module provides the class and function that turn a sequence of
listings into a ProximityGraph, connecting every pair of listings whose
great-circle distance falls within a fixed radius.
"""

import logging
from typing import Iterable, Optional

from ..core.graph import ProximityGraph
from ..core.data_model import record_coordinate
from ..utils.geometry import haversine_distance, within_radius
from ..pipeline_config import GRAPH_CONFIG, GraphConstructionError

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds proximity graphs from listings."""

    def __init__(self, radius_km: Optional[float] = None, inclusive: Optional[bool] = None,
                 earth_radius_km: Optional[float] = None):
        """
        Initialize a new graph builder.

        Args:
            radius_km: Maximum distance for connecting two listings (km)
            inclusive: If True, a pair exactly at the radius is connected
            earth_radius_km: Sphere radius used for distances (km)
        """
        self.radius_km = GRAPH_CONFIG['radius_km'] if radius_km is None else float(radius_km)
        self.inclusive = GRAPH_CONFIG['inclusive'] if inclusive is None else bool(inclusive)
        self.earth_radius_km = (GRAPH_CONFIG['earth_radius_km'] if earth_radius_km is None
                                else float(earth_radius_km))

        if self.radius_km < 0:
            raise GraphConstructionError(f"Radius must be non-negative, got {self.radius_km}")

    def add_nodes(self, graph: ProximityGraph, records: Iterable) -> int:
        """
        Add one node per record that has both coordinates.

        Args:
            graph: Graph receiving the nodes
            records: Listings, in order

        Returns:
            Number of records skipped for missing coordinates
        """
        skipped = 0
        for record in records:
            coordinate = record_coordinate(record)
            if coordinate is None:
                skipped += 1
                continue
            graph.add_node(coordinate)
        return skipped

    def connect_nodes(self, graph: ProximityGraph) -> ProximityGraph:
        """
        Connect every pair of nodes within the radius.

        Each unordered pair (i, j) with i < j is evaluated once, so no
        self-edges or duplicate edges are created.

        Args:
            graph: Graph whose nodes are connected in place

        Returns:
            The same graph
        """
        coordinates = [graph.coordinate(node) for node in graph.node_indices()]
        n = len(coordinates)

        for i in range(n):
            for j in range(i + 1, n):
                distance = haversine_distance(coordinates[i], coordinates[j], self.earth_radius_km)
                if within_radius(distance, self.radius_km, self.inclusive):
                    graph.add_edge(i, j, distance)

        return graph

    def construct_graph(self, records: Iterable, name: Optional[str] = None) -> ProximityGraph:
        """
        Build a proximity graph from listings.

        Args:
            records: Listings exposing optional latitude and longitude
            name: Name of the graph

        Returns:
            ProximityGraph with one node per listing that has a coordinate
        """
        graph = ProximityGraph(name=name)
        skipped = self.add_nodes(graph, records)
        if skipped:
            logger.debug(f"{skipped} records without coordinates skipped")

        self.connect_nodes(graph)
        logger.debug(f"Graph built: {graph.node_count} nodes, {graph.edge_count} edges "
                     f"(radius {self.radius_km} km, {'inclusive' if self.inclusive else 'exclusive'})")
        return graph


def construct_graph(records: Iterable, radius_km: Optional[float] = None,
                    inclusive: Optional[bool] = None) -> ProximityGraph:
    """
    Build a proximity graph from listings.

    Args:
        records: Listings exposing optional latitude and longitude
        radius_km: Maximum distance for an edge, defaults to GRAPH_CONFIG
        inclusive: Whether the radius itself is included, defaults to GRAPH_CONFIG

    Returns:
        ProximityGraph
    """
    return GraphBuilder(radius_km=radius_km, inclusive=inclusive).construct_graph(records)


__all__ = ['GraphBuilder', 'construct_graph']
