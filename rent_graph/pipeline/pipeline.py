"""
Integrated pipeline for ranking rental listings by spatial centrality.

This module implements a pipeline class that ties the package together:
1. Loading listings from a CSV file (or taking them in memory)
2. Building the proximity graph
3. Sampled centrality analysis
4. Placeholder rent prediction
5. Rendering and exporting the results

Steps can run in sequence or independently, sharing a context dict.
Progress is reported through logging and an optional observer callback
invoked after ingestion, graph construction, centrality analysis and
prediction.
"""

import os
import copy
import time
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from ..io.loaders import load_properties
from ..io.exporters import export_centrality_csv, export_graph
from ..visualization.network import generate_visualizations
from ..pipeline_config import PIPELINE_CONFIG, PipelineConfigError
from .graph_builder import GraphBuilder
from .metrics import CentralityAnalyzer, top_central_nodes
from .predictive import build_predictive_model

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

Observer = Callable[[str, Dict[str, Any]], None]


class PipelineStep:
    """A single named step of the pipeline."""

    def __init__(self, name: str, function: Callable, enabled: bool = True, params: Dict = None):
        """
        Initialize a new pipeline step.

        Args:
            name: Name of the step
            function: Function to execute
            enabled: Whether the step runs
            params: Keyword arguments for the function
        """
        self.name = name
        self.function = function
        self.enabled = enabled
        self.params = params or {}
        self.result = None
        self.execution_time = 0
        self.status = "pending"
        self.error = None

    def execute(self, pipeline_context: Dict) -> Any:
        """
        Execute the step.

        Args:
            pipeline_context: Pipeline context

        Returns:
            Result of the step function
        """
        if not self.enabled:
            self.status = "skipped"
            return None

        try:
            self.status = "running"
            start_time = time.time()

            self.result = self.function(pipeline_context, **self.params)

            self.execution_time = time.time() - start_time
            self.status = "completed"
            return self.result

        except Exception as e:
            self.status = "failed"
            self.error = str(e)
            raise


class PipelineConfig:
    """Pipeline configuration."""

    def __init__(self, config_dict: Dict = None, config_file: str = None):
        """
        Initialize a new pipeline configuration.

        Starts from PIPELINE_CONFIG; a JSON file and then a dict are
        layered on top. Step entries are merged by name.

        Args:
            config_dict: Dictionary of settings
            config_file: Path to a JSON file of settings
        """
        self.config = copy.deepcopy(PIPELINE_CONFIG)

        if config_file:
            if not os.path.exists(config_file):
                raise PipelineConfigError(f"Config file not found: {config_file}")
            with open(config_file, 'r') as f:
                try:
                    loaded = json.load(f)
                except json.JSONDecodeError as e:
                    raise PipelineConfigError(f"Invalid JSON in {config_file}: {e}") from e
            self.update(loaded)

        if config_dict:
            self.update(config_dict)

    def update(self, overrides: Dict):
        """
        Merge settings into the configuration.

        Args:
            overrides: Settings; ``steps`` is a list of {name, enabled, params}
        """
        if not isinstance(overrides, dict):
            raise PipelineConfigError(f"Configuration must be a mapping, got {type(overrides).__name__}")

        for key, value in overrides.items():
            if key != 'steps':
                self.config[key] = value
                continue

            if not isinstance(value, list):
                raise PipelineConfigError("'steps' must be a list of step settings")
            for override in value:
                if not isinstance(override, dict) or 'name' not in override:
                    raise PipelineConfigError(f"Invalid step settings: {override!r}")
                step = self._find_step(override['name'])
                if step is None:
                    raise PipelineConfigError(f"Unknown pipeline step: {override['name']}")
                if 'enabled' in override:
                    step['enabled'] = bool(override['enabled'])
                if override.get('params'):
                    step.setdefault('params', {}).update(override['params'])

    def _find_step(self, step_name: str) -> Optional[Dict]:
        for step in self.config.get('steps', []):
            if step['name'] == step_name:
                return step
        return None

    def get_step_config(self, step_name: str) -> Dict:
        """
        Get the parameters of a step.

        Args:
            step_name: Name of the step

        Returns:
            Step parameters
        """
        step = self._find_step(step_name)
        if step is None:
            return {}
        return dict(step.get('params') or {})

    def is_step_enabled(self, step_name: str) -> bool:
        step = self._find_step(step_name)
        if step is None:
            return True
        return step.get('enabled', True)

    def get_global_config(self) -> Dict:
        """
        Get the global settings (everything except the steps).

        Returns:
            Global settings
        """
        config = self.config.copy()
        if 'steps' in config:
            del config['steps']
        return config


class Pipeline:
    """Pipeline for loading listings, building the graph and ranking nodes."""

    def __init__(self, config: Union[Dict, PipelineConfig, str] = None,
                 observer: Optional[Observer] = None):
        """
        Initialize a new pipeline.

        Args:
            config: Pipeline configuration (dict, PipelineConfig or path to a JSON file)
            observer: Callable receiving (stage, payload) at each pipeline boundary
        """
        self.context = {
            'properties': [],        # Loaded listings
            'graph': None,           # Proximity graph
            'centrality': [],        # Ranked CentralityScore list
            'top_centrality': [],    # Head of the ranking
            'predictions': [],       # Placeholder predictions
            'output': {}             # Written files
        }

        if isinstance(config, dict):
            self.config = PipelineConfig(config_dict=config)
        elif isinstance(config, PipelineConfig):
            self.config = config
        elif isinstance(config, str):
            self.config = PipelineConfig(config_file=config)
        else:
            self.config = PipelineConfig()

        self.observer = observer
        self.logger = self._setup_logger()

        self.steps = []
        self._setup_steps()

    def _setup_logger(self) -> logging.Logger:
        """
        Configure the pipeline logger.

        Returns:
            Configured logger
        """
        settings = self.config.get_global_config().get('logger', {})
        level = getattr(logging, str(settings.get('level', 'INFO')).upper(), logging.INFO)

        logger = logging.getLogger('rent_graph.pipeline')
        logger.setLevel(level)

        # Attach the console handler only once per process
        if settings.get('console', True) and not logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(console_handler)

        return logger

    def _setup_steps(self):
        """Create the pipeline steps."""
        definitions = [
            ('load_data', self._load_data),
            ('construct_graph', self._construct_graph),
            ('analyze_centrality', self._analyze_centrality),
            ('build_predictions', self._build_predictions),
            ('visualize_results', self._visualize_results),
            ('export_results', self._export_results),
        ]
        self.steps = [
            PipelineStep(name, function,
                         enabled=self.config.is_step_enabled(name),
                         params=self.config.get_step_config(name))
            for name, function in definitions
        ]

    def _notify(self, stage: str, **payload):
        if self.observer is not None:
            self.observer(stage, payload)

    def get_step(self, step_name: str) -> Optional[PipelineStep]:
        for step in self.steps:
            if step.name == step_name:
                return step
        return None

    def run(self, properties: Optional[List] = None) -> Dict:
        """
        Execute every enabled step.

        Args:
            properties: Listings to analyze; when given, the load_data
                step is skipped and these are used instead

        Returns:
            Pipeline context with results
        """
        self.logger.info("Starting pipeline")
        start_time = time.time()

        if properties is not None:
            self.context['properties'] = list(properties)
            self.logger.info(f"Using {len(self.context['properties'])} in-memory listings")
            self._notify('ingested', count=len(self.context['properties']))

        stop_on_error = self.config.get_global_config().get('stop_on_error', True)

        for step in self.steps:
            if properties is not None and step.name == 'load_data':
                step.status = "skipped"
                continue
            if not step.enabled:
                step.status = "skipped"
                self.logger.info(f"Step {step.name} disabled")
                continue

            self.logger.info(f"Running step: {step.name}")
            try:
                step.execute(self.context)
                self.logger.info(f"Step {step.name} completed in {step.execution_time:.2f}s")
            except Exception as e:
                self.logger.error(f"Error in step {step.name}: {e}")
                if stop_on_error:
                    raise

        total_time = time.time() - start_time
        self.logger.info(f"Pipeline completed in {total_time:.2f}s")

        return self.context

    def run_step(self, step_name: str) -> Any:
        """
        Execute a single step.

        Args:
            step_name: Name of the step

        Returns:
            Result of the step
        """
        step = self.get_step(step_name)
        if step is not None and step.enabled:
            self.logger.info(f"Running step: {step.name}")
            result = step.execute(self.context)
            self.logger.info(f"Step {step.name} completed in {step.execution_time:.2f}s")
            return result

        self.logger.warning(f"Step {step_name} not found or disabled")
        return None

    def run_steps(self, step_names: List[str]) -> Dict:
        """
        Execute a sequence of steps.

        Args:
            step_names: Names of the steps, in order

        Returns:
            Pipeline context with results
        """
        self.logger.info(f"Running steps: {', '.join(step_names)}")
        start_time = time.time()

        for step_name in step_names:
            self.run_step(step_name)

        total_time = time.time() - start_time
        self.logger.info(f"Steps completed in {total_time:.2f}s")

        return self.context

    def _load_data(self, context: Dict, dataset_path: str = None, columns: Dict = None) -> List:
        """
        Load listings from a CSV file.

        Args:
            context: Pipeline context
            dataset_path: Path to the CSV file
            columns: Field to source column mapping

        Returns:
            Loaded listings
        """
        if not dataset_path:
            raise PipelineConfigError("No dataset_path configured for load_data")

        properties = load_properties(dataset_path, columns)
        context['properties'] = properties
        self.logger.info(f"Dataset loaded: {len(properties)} properties")
        self._notify('ingested', count=len(properties), dataset_path=dataset_path)
        return properties

    def _construct_graph(self, context: Dict, radius_km: float = None, inclusive: bool = None):
        """
        Build the proximity graph from the loaded listings.

        Args:
            context: Pipeline context
            radius_km: Maximum distance for an edge (km)
            inclusive: Whether the radius itself is included

        Returns:
            ProximityGraph
        """
        properties = context['properties']
        if not properties:
            self.logger.warning("No listings to build a graph from")

        builder = GraphBuilder(radius_km=radius_km, inclusive=inclusive)
        graph = builder.construct_graph(properties, name='listings')
        context['graph'] = graph

        self.logger.info(f"Graph constructed: {graph.node_count} nodes and {graph.edge_count} edges")
        self._notify('graph_constructed', node_count=graph.node_count, edge_count=graph.edge_count,
                     radius_km=builder.radius_km, inclusive=builder.inclusive)
        return graph

    def _analyze_centrality(self, context: Dict, sample_size: int = None, top_n: int = None):
        """
        Rank a prefix of the graph's nodes by centrality.

        Args:
            context: Pipeline context
            sample_size: Number of nodes to analyze
            top_n: Length of the reported head of the ranking

        Returns:
            Ranked scores
        """
        graph = context['graph']
        if graph is None:
            raise PipelineConfigError("analyze_centrality requires the construct_graph step")

        scores = CentralityAnalyzer(graph).analyze(sample_size)
        top = top_central_nodes(scores, top_n)
        context['centrality'] = scores
        context['top_centrality'] = top

        self.logger.info(f"Top {len(top)} central nodes: {[(s.node, s.score) for s in top]}")
        self._notify('centrality_analyzed', analyzed=len(scores), top=top)
        return scores

    def _build_predictions(self, context: Dict, factor: float = None) -> List[float]:
        """
        Run the placeholder predictor over the loaded listings.

        Args:
            context: Pipeline context
            factor: Multiplier applied to rent per square foot

        Returns:
            Predictions
        """
        predictions = build_predictive_model(context['properties'], factor)
        context['predictions'] = predictions

        first = predictions[0] if predictions else 0.0
        self.logger.info(f"Prediction completed. Example prediction for the first property: {first:.2f}")
        self._notify('predictions_built', count=len(predictions))
        return predictions

    def _visualize_results(self, context: Dict, output_directory: str = 'output',
                           plot_graph: bool = False, top_n: int = None) -> List[str]:
        """
        Render the ranking (and optionally the graph) to PNG files.

        Args:
            context: Pipeline context
            output_directory: Directory for the images
            plot_graph: Whether to draw the graph as well
            top_n: Number of ranking entries to draw

        Returns:
            Paths of the written files
        """
        written = generate_visualizations(
            context['centrality'], context['predictions'],
            output_directory=output_directory,
            graph=context['graph'] if plot_graph else None,
            top_n=top_n)
        context['output']['visualizations'] = written
        return written

    def _export_results(self, context: Dict, output_directory: str = 'output/results',
                        formats: List[str] = None) -> List[str]:
        """
        Export the ranking and the graph.

        Args:
            context: Pipeline context
            output_directory: Directory for the exported files
            formats: Any of 'csv', 'geojson', 'gpkg'

        Returns:
            Paths of the written files
        """
        formats = formats or ['csv']
        written = []

        if 'csv' in formats:
            written.append(export_centrality_csv(
                context['centrality'], os.path.join(output_directory, 'centrality.csv')))

        graph = context['graph']
        if graph is not None:
            if 'geojson' in formats:
                written.extend(export_graph(
                    graph, os.path.join(output_directory, 'graph.geojson'), context['centrality']))
            if 'gpkg' in formats:
                written.extend(export_graph(
                    graph, os.path.join(output_directory, 'graph.gpkg'), context['centrality']))

        context['output']['exports'] = written
        self.logger.info(f"{len(written)} files exported to {output_directory}")
        return written

    def summary(self) -> Dict:
        """
        Summary of the last run.

        Returns:
            Counts, head of the ranking and per-step status
        """
        graph = self.context['graph']
        return {
            'properties': len(self.context['properties']),
            'nodes': graph.node_count if graph is not None else 0,
            'edges': graph.edge_count if graph is not None else 0,
            'top_centrality': [(s.node, s.score) for s in self.context['top_centrality']],
            'steps': {step.name: {'status': step.status,
                                  'execution_time': step.execution_time,
                                  'error': step.error}
                      for step in self.steps}
        }


__all__ = ['Pipeline', 'PipelineConfig', 'PipelineStep']
