"""
Pipeline configuration for the Rent Graph project.

This module defines the settings for the complete analysis pipeline:
1. Loading rental listings from a tabular file
2. Building the proximity graph between listings
3. Ranking listings by traversal centrality
4. Placeholder rent prediction
5. Rendering and exporting the results
"""

# Settings for loading listings
DATA_CONFIG = {
    'dataset_path': 'dubai_properties.csv',
    # Source column names, matched case-insensitively
    'columns': {
        'latitude': 'Latitude',
        'longitude': 'Longitude',
        'rent_per_sqft': 'Rent_per_sqft',
        'address': 'Address',
        'rent': 'Rent',
        'beds': 'Beds',
        'baths': 'Baths',
        'age_of_listing_in_days': 'Age_of_listing_in_days',
        'location': 'Location',
        'city': 'City'
    }
}

# Settings for proximity graph construction
GRAPH_CONFIG = {
    'radius_km': 10.0,  # in km, maximum distance for connecting two listings
    'inclusive': True,  # True: distance <= radius, False: distance < radius
    'earth_radius_km': 6371.0
}

# Settings for centrality analysis
CENTRALITY_CONFIG = {
    'sample_size': 50,  # prefix of the node index space
    'top_n': 5
}

# Settings for the placeholder predictor
PREDICTION_CONFIG = {
    'factor': 1.1
}

# Settings for rendering
VISUALIZATION_CONFIG = {
    'output_directory': 'output',
    'centrality_filename': 'centrality.png',
    'graph_filename': 'proximity_graph.png',
    'width_px': 1024,
    'height_px': 768,
    'dpi': 100,
    'title': 'Top 5 Central Nodes',
    'add_basemap': False
}

# Settings for the integrated pipeline
PIPELINE_CONFIG = {
    'steps': [
        {'name': 'load_data', 'enabled': True, 'params': {
            'dataset_path': DATA_CONFIG['dataset_path']
        }},
        {'name': 'construct_graph', 'enabled': True, 'params': {
            'radius_km': GRAPH_CONFIG['radius_km'],
            'inclusive': GRAPH_CONFIG['inclusive']
        }},
        {'name': 'analyze_centrality', 'enabled': True, 'params': CENTRALITY_CONFIG},
        {'name': 'build_predictions', 'enabled': True, 'params': PREDICTION_CONFIG},
        {'name': 'visualize_results', 'enabled': True, 'params': {
            'output_directory': VISUALIZATION_CONFIG['output_directory'],
            'plot_graph': False
        }},
        {'name': 'export_results', 'enabled': False, 'params': {
            'output_directory': 'output/results',
            'formats': ['csv', 'geojson']
        }}
    ],

    # General settings
    'stop_on_error': True,
    'logger': {
        'level': 'INFO',
        'console': True
    }
}


# Custom error classes for the pipeline
class RentGraphError(Exception):
    """Base error for the package."""
    pass

class PipelineConfigError(RentGraphError):
    """Error in the pipeline configuration."""
    pass

class DataLoadError(RentGraphError):
    """Error while loading listing data."""
    pass

class GraphConstructionError(RentGraphError):
    """Error while building the proximity graph."""
    pass

class CentralityError(RentGraphError):
    """Error in the centrality analysis."""
    pass
