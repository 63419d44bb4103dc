"""
Functions for visualizing centrality rankings and proximity graphs.
"""

import os
import logging
import matplotlib.pyplot as plt
import contextily as ctx
from matplotlib.colors import Normalize
from matplotlib.cm import ScalarMappable

from ..core.graph import ProximityGraph
from ..pipeline_config import VISUALIZATION_CONFIG

logger = logging.getLogger(__name__)


def _figsize(width_px, height_px, dpi):
    return (width_px / dpi, height_px / dpi)


def plot_centrality(centrality_results, prediction_results=None, filepath=None,
                    top_n=None, title=None, ax=None):
    """
    Plot the top entries of a centrality ranking.

    Each entry is drawn as a point at (node index, score).

    Parameters
    ----------
    centrality_results : list of CentralityScore
        Ranking, highest score first
    prediction_results : list of float, optional
        Predictions from the placeholder model; accepted for interface
        compatibility and not drawn
    filepath : str, optional
        Path of the PNG to write (default output/centrality.png)
    top_n : int, optional
        Number of entries to draw (default: all)
    title : str, optional
        Plot title
    ax : matplotlib.axes.Axes, optional
        Axes to plot on; when given nothing is saved

    Returns
    -------
    str or matplotlib.axes.Axes
        Path of the saved figure, or the axes when ``ax`` was given
    """
    cfg = VISUALIZATION_CONFIG
    entries = list(centrality_results if top_n is None else centrality_results[:top_n])

    own_figure = ax is None
    if own_figure:
        fig, ax = plt.subplots(figsize=_figsize(cfg['width_px'], cfg['height_px'], cfg['dpi']),
                               dpi=cfg['dpi'])

    if entries:
        nodes = [node for node, _ in entries]
        scores = [score for _, score in entries]
        ax.scatter(nodes, scores, s=25, color='blue')
        for node, score in entries:
            ax.annotate(str(node), (node, score), textcoords='offset points', xytext=(4, 4), fontsize=8)
        ax.set_ylim(bottom=0.0)

    ax.set_xlabel('Node index')
    ax.set_ylabel('Centrality')
    ax.set_title(title or cfg['title'])
    ax.grid(True, alpha=0.3)

    if not own_figure:
        return ax

    if filepath is None:
        filepath = os.path.join(cfg['output_directory'], cfg['centrality_filename'])
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)

    fig.savefig(filepath, dpi=cfg['dpi'])
    plt.close(fig)
    logger.info(f"Visualization saved to {filepath}")
    return filepath


def plot_proximity_graph(graph: ProximityGraph, centrality_results=None, filepath=None,
                         node_size=30, edge_width=0.5, node_cmap='viridis',
                         edge_color='gray', add_basemap=False, title=None, ax=None):
    """
    Plot a ProximityGraph in longitude/latitude space.

    Parameters
    ----------
    graph : ProximityGraph
        Graph to plot
    centrality_results : list of CentralityScore, optional
        Scores used to color the nodes; unscored nodes are drawn in gray
    filepath : str, optional
        Path of the PNG to write (default output/proximity_graph.png)
    node_size : int or float, optional
        Size of nodes
    edge_width : int or float, optional
        Width of edges
    node_cmap : str or matplotlib.colors.Colormap, optional
        Colormap for nodes
    edge_color : str, optional
        Color of edges
    add_basemap : bool, optional
        Whether to add a basemap
    title : str, optional
        Plot title
    ax : matplotlib.axes.Axes, optional
        Axes to plot on; when given nothing is saved

    Returns
    -------
    str or matplotlib.axes.Axes
        Path of the saved figure, or the axes when ``ax`` was given
    """
    cfg = VISUALIZATION_CONFIG
    node_attributes = {}
    if centrality_results:
        node_attributes['centrality'] = {node: score for node, score in centrality_results}

    nodes_gdf, edges_gdf = graph.to_geodataframes(node_attributes)

    own_figure = ax is None
    if own_figure:
        fig, ax = plt.subplots(figsize=_figsize(cfg['width_px'], cfg['height_px'], cfg['dpi']),
                               dpi=cfg['dpi'])

    if len(edges_gdf) > 0:
        edges_gdf.plot(ax=ax, color=edge_color, linewidth=edge_width, alpha=0.5)

    if len(nodes_gdf) > 0:
        if 'centrality' in nodes_gdf.columns:
            scored = nodes_gdf[nodes_gdf['centrality'].notna()]
            unscored = nodes_gdf[nodes_gdf['centrality'].isna()]
            if len(unscored) > 0:
                unscored.plot(ax=ax, color='lightgray', markersize=node_size, alpha=0.8)
            if len(scored) > 0:
                values = scored['centrality'].astype(float)
                scored.plot(ax=ax, column='centrality', cmap=node_cmap,
                            markersize=node_size, alpha=0.9)

                # Add colorbar for nodes
                norm = Normalize(vmin=values.min(), vmax=values.max())
                sm = ScalarMappable(norm=norm, cmap=node_cmap)
                sm.set_array([])
                plt.colorbar(sm, ax=ax, shrink=0.5, label='centrality')
        else:
            nodes_gdf.plot(ax=ax, color='blue', markersize=node_size, alpha=0.8)

    # Add basemap if requested
    if add_basemap and len(nodes_gdf) > 0:
        try:
            ctx.add_basemap(ax, crs=nodes_gdf.crs)
        except Exception as e:
            logger.warning(f"Could not add basemap: {e}")

    if title:
        ax.set_title(title)
    else:
        ax.set_title(f'Graph: {graph.name}' if graph.name else 'Proximity graph')

    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')

    if not own_figure:
        return ax

    if filepath is None:
        filepath = os.path.join(cfg['output_directory'], cfg['graph_filename'])
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)

    fig.savefig(filepath, dpi=cfg['dpi'])
    plt.close(fig)
    logger.info(f"Graph visualization saved to {filepath}")
    return filepath


def generate_visualizations(centrality_results, prediction_results, output_directory=None,
                            graph=None, top_n=None):
    """
    Render the results of an analysis run.

    Parameters
    ----------
    centrality_results : list of CentralityScore
        Ranking, highest score first
    prediction_results : list of float
        Predictions, consumed read-only
    output_directory : str, optional
        Directory for the PNG files
    graph : ProximityGraph, optional
        When given, the graph is drawn as well
    top_n : int, optional
        Number of ranking entries to draw

    Returns
    -------
    list of str
        Paths of the written files
    """
    cfg = VISUALIZATION_CONFIG
    output_directory = output_directory or cfg['output_directory']

    written = [plot_centrality(
        centrality_results, prediction_results,
        filepath=os.path.join(output_directory, cfg['centrality_filename']),
        top_n=top_n)]

    if graph is not None:
        written.append(plot_proximity_graph(
            graph, centrality_results,
            filepath=os.path.join(output_directory, cfg['graph_filename']),
            add_basemap=cfg['add_basemap']))

    return written


__all__ = ['plot_centrality', 'plot_proximity_graph', 'generate_visualizations']
