#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command line entry point for Rent Graph.

Loads a listings CSV, builds the proximity graph, ranks a sample of
listings by centrality and renders the results.
"""

import sys
import argparse
import logging

from .pipeline.pipeline import Pipeline, PipelineConfig
from .pipeline_config import CENTRALITY_CONFIG, GRAPH_CONFIG, RentGraphError

logger = logging.getLogger('rent_graph.cli')


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Rank rental listings by centrality in a proximity graph')

    parser.add_argument('dataset', type=str,
                        help='CSV file with the listings')

    parser.add_argument('--radius-km', type=float, default=None,
                        help=f"Maximum distance for connecting listings (default: {GRAPH_CONFIG['radius_km']})")

    parser.add_argument('--exclusive', action='store_true', default=None,
                        help='Connect only pairs strictly closer than the radius')

    parser.add_argument('--sample-size', type=int, default=None,
                        help=f"Number of nodes to analyze (default: {CENTRALITY_CONFIG['sample_size']})")

    parser.add_argument('--top', type=int, default=None,
                        help=f"Number of central nodes to report (default: {CENTRALITY_CONFIG['top_n']})")

    parser.add_argument('--output', type=str, default=None,
                        help='Directory for results (default: output)')

    parser.add_argument('--no-plot', action='store_true', default=None,
                        help='Skip rendering the results')

    parser.add_argument('--export', action='store_true', default=None,
                        help='Export the ranking and graph to the output directory')

    parser.add_argument('--config', type=str, default=None,
                        help='JSON file with pipeline settings')

    return parser.parse_args(argv)


def build_config(args):
    """
    Translate parsed arguments into pipeline step settings.

    Only options given on the command line are emitted, so settings from
    the config file (or the package defaults) apply to everything else.
    """
    steps = {
        'load_data': {'params': {'dataset_path': args.dataset}},
        'construct_graph': {'params': {}},
        'analyze_centrality': {'params': {}},
        'visualize_results': {'params': {}},
        'export_results': {'params': {}},
    }

    if args.radius_km is not None:
        steps['construct_graph']['params']['radius_km'] = args.radius_km
    if args.exclusive:
        steps['construct_graph']['params']['inclusive'] = False
    if args.sample_size is not None:
        steps['analyze_centrality']['params']['sample_size'] = args.sample_size
    if args.top is not None:
        steps['analyze_centrality']['params']['top_n'] = args.top
    if args.output is not None:
        steps['visualize_results']['params']['output_directory'] = args.output
        steps['export_results']['params']['output_directory'] = f"{args.output}/results"
    if args.no_plot:
        steps['visualize_results']['enabled'] = False
    if args.export:
        steps['export_results']['enabled'] = True

    return {'steps': [{'name': name, **settings} for name, settings in steps.items()
                      if settings['params'] or 'enabled' in settings]}


def print_summary(summary):
    print("\nSummary of Analysis:")
    print("---------------------")
    print(f"Total Properties Analyzed: {summary['properties']}")
    print(f"Total Nodes in Graph: {summary['nodes']}")
    print(f"Total Edges in Graph: {summary['edges']}")
    print(f"Top {len(summary['top_centrality'])} Most Connected Locations (Centrality): "
          f"{summary['top_centrality']}")


def main(argv=None):
    args = parse_arguments(argv)

    try:
        config = PipelineConfig(config_file=args.config)
        config.update(build_config(args))
        pipeline = Pipeline(config=config)
        pipeline.run()
    except RentGraphError as e:
        logger.error(f"Error processing dataset: {e}")
        return 1

    print_summary(pipeline.summary())
    return 0


if __name__ == '__main__':
    sys.exit(main())
