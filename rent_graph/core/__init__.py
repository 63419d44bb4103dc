"""
Core functionality for Rent Graph.

This module contains the fundamental data structures that the
graph builder and centrality analyzer operate on.
"""

from .graph import *
from .data_model import *
