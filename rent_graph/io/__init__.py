"""
Input/output operations for listing data and analysis results.

This module provides functions for loading listings from tabular
files and saving rankings and graphs in various formats.
"""

from .loaders import *
from .exporters import *
