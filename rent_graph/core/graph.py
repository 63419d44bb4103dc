"""
Graph data structures for geolocated listings.

This module provides the undirected, weighted proximity graph that the
graph builder produces and the centrality analyzer traverses.
"""

import networkx as nx
import geopandas as gpd
from shapely.geometry import Point, LineString
from typing import Iterator, List, Tuple

from .data_model import Coordinate


class ProximityGraph:
    """
    An undirected, weighted, simple graph of geolocated nodes.

    Nodes are dense integer indices assigned in insertion order starting
    at 0, each holding one Coordinate. Edge weights are distances in km.
    """

    def __init__(self, name=None):
        """
        Initialize a ProximityGraph.

        Parameters
        ----------
        name : str, optional
            Name of the graph
        """
        self.name = name
        self.graph = nx.Graph()

    def add_node(self, coordinate) -> int:
        """
        Add a node to the graph.

        Parameters
        ----------
        coordinate : Coordinate or tuple of float
            (latitude, longitude) of the node

        Returns
        -------
        int
            Index of the new node
        """
        index = self.graph.number_of_nodes()
        self.graph.add_node(index, coordinate=Coordinate(*coordinate))
        return index

    def add_edge(self, source: int, target: int, weight: float):
        """
        Add an edge between two existing nodes.

        Parameters
        ----------
        source : int
            Index of the first node
        target : int
            Index of the second node
        weight : float
            Weight of the edge (distance in km)
        """
        if source == target:
            raise ValueError(f"Self-edge on node {source} is not allowed")
        if source not in self.graph or target not in self.graph:
            raise ValueError(f"Unknown node in edge ({source}, {target})")
        if self.graph.has_edge(source, target):
            raise ValueError(f"Edge ({source}, {target}) already exists")

        self.graph.add_edge(source, target, weight=float(weight))

    @property
    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def node_indices(self) -> Iterator[int]:
        """Iterate over node indices in ascending order."""
        return iter(range(self.node_count))

    def has_node(self, node: int) -> bool:
        return node in self.graph

    def has_edge(self, source: int, target: int) -> bool:
        return self.graph.has_edge(source, target)

    def edge_weight(self, source: int, target: int) -> float:
        return self.graph[source][target]['weight']

    def edges(self, node: int) -> Iterator[Tuple[int, float]]:
        """
        Iterate over the edges incident to a node.

        Neighbors are yielded in edge insertion order.

        Parameters
        ----------
        node : int
            Index of the node

        Returns
        -------
        iterator of (int, float)
            (neighbor index, edge weight) pairs
        """
        for neighbor, data in self.graph.adj[node].items():
            yield neighbor, data['weight']

    def neighbors(self, node: int) -> List[int]:
        return list(self.graph.adj[node])

    def coordinate(self, node: int) -> Coordinate:
        """
        Get the coordinate of a node.

        Parameters
        ----------
        node : int
            Index of the node

        Returns
        -------
        Coordinate
            (latitude, longitude) of the node
        """
        return self.graph.nodes[node]['coordinate']

    def edge_list(self) -> List[Tuple[int, int, float]]:
        """All edges as (i, j, weight) with i < j, in insertion order."""
        return [(min(u, v), max(u, v), data['weight'])
                for u, v, data in self.graph.edges(data=True)]

    def to_networkx(self) -> nx.Graph:
        """Return a copy of the underlying networkx graph."""
        return self.graph.copy()

    def to_geodataframes(self, node_attributes=None):
        """
        Convert the graph to GeoDataFrames.

        Parameters
        ----------
        node_attributes : dict, optional
            Mapping of column name to {node index: value}, added to the
            nodes GeoDataFrame (e.g. centrality scores)

        Returns
        -------
        tuple of GeoDataFrame
            (nodes_gdf, edges_gdf), both in EPSG:4326
        """
        node_attributes = node_attributes or {}

        # Create nodes GeoDataFrame
        nodes_data = []
        for node in self.node_indices():
            coord = self.coordinate(node)
            node_data = {
                'id': node,
                'latitude': coord.latitude,
                'longitude': coord.longitude,
                'geometry': Point(coord.longitude, coord.latitude)
            }
            for column, values in node_attributes.items():
                node_data[column] = values.get(node)
            nodes_data.append(node_data)

        # Create edges GeoDataFrame
        edges_data = []
        for source, target, weight in self.edge_list():
            c1 = self.coordinate(source)
            c2 = self.coordinate(target)
            edges_data.append({
                'source': source,
                'target': target,
                'weight': weight,
                'geometry': LineString([(c1.longitude, c1.latitude), (c2.longitude, c2.latitude)])
            })

        nodes_gdf = gpd.GeoDataFrame(
            nodes_data, columns=['id', 'latitude', 'longitude', *node_attributes, 'geometry'],
            geometry='geometry', crs='EPSG:4326')
        edges_gdf = gpd.GeoDataFrame(
            edges_data, columns=['source', 'target', 'weight', 'geometry'],
            geometry='geometry', crs='EPSG:4326')

        return nodes_gdf, edges_gdf

    def __len__(self):
        return self.node_count

    def __repr__(self):
        return f"ProximityGraph(name={self.name}, nodes={self.node_count}, edges={self.edge_count})"


__all__ = ['ProximityGraph']
