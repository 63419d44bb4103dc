"""
Rent Graph - proximity graphs and centrality ranking for geolocated rental listings.
"""

__version__ = '0.1.0'

# Import main submodules for easy access
from . import core
from . import io
from . import utils
from . import pipeline

from .core.data_model import Coordinate, Property
from .core.graph import ProximityGraph
from .pipeline.graph_builder import construct_graph
from .pipeline.metrics import CentralityScore, analyze_centrality, bfs_total_distance
