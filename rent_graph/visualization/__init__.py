"""
Visualization functions for centrality rankings and proximity graphs.
"""

from .network import *
