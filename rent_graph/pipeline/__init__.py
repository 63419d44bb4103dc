#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Pipeline module for building proximity graphs and ranking listings.

This module provides the graph builder, the centrality analyzer, the
placeholder predictor and the pipeline that runs them in sequence.
"""

from .graph_builder import GraphBuilder, construct_graph
from .metrics import CentralityAnalyzer, CentralityScore, analyze_centrality, bfs_total_distance
from .predictive import build_predictive_model

__all__ = ['GraphBuilder', 'construct_graph', 'CentralityAnalyzer', 'CentralityScore',
           'analyze_centrality', 'bfs_total_distance', 'build_predictive_model']
