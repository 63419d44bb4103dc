"""
Utility functions for the Rent Graph package.

This module provides general utility functions used
throughout the package.
"""

from .geometry import *
