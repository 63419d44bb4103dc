"""
Functions for exporting centrality rankings and proximity graphs.
"""

import os
import pandas as pd

from ..core.graph import ProximityGraph


def export_centrality_csv(scores, filepath):
    """
    Export a centrality ranking to CSV.

    Parameters
    ----------
    scores : list of CentralityScore
        Ranking to export, written in its given order
    filepath : str
        Path to the output file

    Returns
    -------
    str
        Path of the written file
    """
    # Create directory if it doesn't exist
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)

    df = pd.DataFrame([(int(node), float(score)) for node, score in scores],
                      columns=['node', 'score'])
    df.to_csv(filepath, index=False)
    return filepath


def export_graph(graph: ProximityGraph, filepath, scores=None, driver=None):
    """
    Export a proximity graph as node and edge layers.

    Parameters
    ----------
    graph : ProximityGraph
        Graph to export
    filepath : str
        Path to the output file. GeoPackage output holds both layers;
        for other formats the edges go to a sibling ``*_edges`` file
    scores : list of CentralityScore, optional
        Scores added to the nodes layer as a ``centrality`` column
    driver : str, optional
        Driver name for fiona output (auto-detected from extension if not provided)

    Returns
    -------
    list of str
        Paths of the written files
    """
    _, ext = os.path.splitext(filepath)

    # Determine driver if not provided
    if driver is None:
        if ext.lower() == '.gpkg':
            driver = 'GPKG'
        elif ext.lower() == '.shp':
            driver = 'ESRI Shapefile'
        elif ext.lower() in ['.geojson', '.json']:
            driver = 'GeoJSON'
        else:
            raise ValueError(f"Unsupported file format: {ext}")

    node_attributes = {}
    if scores is not None:
        node_attributes['centrality'] = {node: score for node, score in scores}

    nodes_gdf, edges_gdf = graph.to_geodataframes(node_attributes)

    # Create directory if it doesn't exist
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)

    if driver == 'GPKG':
        nodes_gdf.to_file(filepath, layer='nodes', driver=driver)
        if len(edges_gdf) > 0:
            edges_gdf.to_file(filepath, layer='edges', driver=driver)
        return [filepath]

    base, ext = os.path.splitext(filepath)
    edges_path = f"{base}_edges{ext}"
    nodes_gdf.to_file(filepath, driver=driver)
    written = [filepath]
    if len(edges_gdf) > 0:
        edges_gdf.to_file(edges_path, driver=driver)
        written.append(edges_path)
    return written


__all__ = ['export_centrality_csv', 'export_graph']
