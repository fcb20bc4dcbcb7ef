"""Configuration Management with Pydantic.

This module implements configuration models using Pydantic for parsing and
validation of YAML/JSON graph definitions with environment variable
overrides. A configuration file names one or more graphs, each with a vertex
count and an edge list, plus the logging settings of the command-line driver.

Example configuration::

    logging_level: INFO
    json_logs: false
    graphs:
      - name: weighted
        vertex_count: 5
        edges:
          - {source: 0, target: 1, weight: 10}
          - {source: 0, target: 3, weight: 30, undirected: true}
"""

import os
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from graphlab.graph.graph import Graph

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILES = ("graphlab.yaml", "graphlab.yml", "graphlab.json")


class EdgeConfig(BaseModel):
    """A single edge definition.

    Attributes:
        source: Vertex the edge leaves
        target: Vertex the edge enters
        weight: Integer edge weight
        undirected: Store the edge in both directions
    """

    source: int = Field(ge=0, description="Source vertex id")
    target: int = Field(ge=0, description="Target vertex id")
    weight: int = Field(default=0, description="Edge weight")
    undirected: bool = Field(default=False, description="Add the reverse edge too")


class GraphConfig(BaseModel):
    """A named graph definition.

    Attributes:
        name: Identifier used to select the graph
        vertex_count: Number of vertices
        edges: Edges added in order when the graph is built
    """

    name: str = Field(
        description="Graph name",
        pattern=r"^[\w.-]+$",
    )
    vertex_count: int = Field(ge=0, description="Number of vertices")
    edges: list[EdgeConfig] = Field(default_factory=list, description="Edge list")

    @model_validator(mode="after")
    def validate_edge_endpoints(self) -> "GraphConfig":
        """Validate that every edge endpoint is a vertex of this graph.

        Raises:
            ValueError: If an endpoint is outside [0, vertex_count)
        """
        for edge in self.edges:
            for vertex in (edge.source, edge.target):
                if vertex >= self.vertex_count:
                    msg = (
                        f"Edge ({edge.source}, {edge.target}) in graph '{self.name}' "
                        f"references vertex {vertex} outside [0, {self.vertex_count})"
                    )
                    raise ValueError(msg)
        return self

    def build(self) -> Graph:
        """Create a Graph populated with this definition's edges."""
        graph = Graph(self.vertex_count)
        for edge in self.edges:
            if edge.undirected:
                graph.add_undirected_edge(edge.source, edge.target, edge.weight)
            else:
                graph.add_edge(edge.source, edge.target, edge.weight)

        logger.info(
            "graph_built_from_config",
            graph=self.name,
            vertex_count=graph.vertex_count,
            edge_count=graph.edge_count,
        )
        return graph

    model_config = {"str_strip_whitespace": True}


class LabConfig(BaseModel):
    """Main configuration combining graph definitions and logging settings.

    Attributes:
        graphs: Graph definitions, names unique
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render logs as JSON instead of console text
    """

    graphs: list[GraphConfig] = Field(min_length=1, description="Graph definitions")
    logging_level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    @field_validator("graphs")
    @classmethod
    def validate_unique_names(cls, v: list[GraphConfig]) -> list[GraphConfig]:
        """Validate that no two graphs share a name.

        Raises:
            ValueError: If a name is repeated
        """
        seen: set[str] = set()
        for graph in v:
            if graph.name in seen:
                msg = f"Duplicate graph name: {graph.name}"
                raise ValueError(msg)
            seen.add(graph.name)
        return v

    def get_graph(self, name: str | None = None) -> GraphConfig:
        """Return the graph definition called ``name``, or the first one.

        Raises:
            KeyError: If no graph has that name
        """
        if name is None:
            return self.graphs[0]
        for graph in self.graphs:
            if graph.name == name:
                return graph
        msg = f"Graph not found in configuration: {name}"
        raise KeyError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LabConfig":
        """Load configuration from a YAML (or JSON) file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed and validated LabConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If configuration is empty, unparsable or invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)

            if not config_data:
                msg = "Configuration file is empty"
                raise ValueError(msg)

            if not isinstance(config_data, dict):
                msg = (
                    "Configuration must be a mapping, got "
                    f"{type(config_data).__name__}"
                )
                raise ValueError(msg)

            config_data = cls._apply_env_overrides(config_data)

            config = cls(**config_data)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e
        else:
            logger.info(
                "configuration_loaded",
                graph_count=len(config.graphs),
                logging_level=config.logging_level,
            )

            return config

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Supported variables: GRAPHLAB_LOGGING_LEVEL, GRAPHLAB_JSON_LOGS.

        Args:
            config_data: Base configuration dictionary from file

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            "logging_level": "GRAPHLAB_LOGGING_LEVEL",
            "json_logs": "GRAPHLAB_JSON_LOGS",
        }

        for key, env_var in env_overrides.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            if key == "json_logs":
                config_data[key] = value.lower() in ("true", "1", "yes")
            else:
                config_data[key] = value.upper()

            logger.debug("env_override_applied", env_var=env_var, config_path=key)

        return config_data



def find_default_config(directory: str | Path = ".") -> Path | None:
    """Return the first default configuration file present in ``directory``.

    Looks for graphlab.yaml, graphlab.yml and graphlab.json, in that order.
    """
    for default_name in DEFAULT_CONFIG_FILES:
        default_path = Path(directory) / default_name
        if default_path.exists():
            return default_path
    return None


def load_config(config_path: str | Path | None = None) -> LabConfig:
    """Load configuration from file.

    Args:
        config_path: Path to configuration file. If None, looks for
            graphlab.yaml, graphlab.yml or graphlab.json in the current
            directory.

    Returns:
        Loaded LabConfig instance

    Raises:
        FileNotFoundError: If config file not found
        ValueError: If config file is invalid
    """
    if config_path is None:
        config_path = find_default_config()
        if config_path is None:
            msg = (
                "No configuration file found. Expected "
                f"{', '.join(DEFAULT_CONFIG_FILES[:-1])}, or {DEFAULT_CONFIG_FILES[-1]}"
            )
            raise FileNotFoundError(msg)

    return LabConfig.from_yaml(config_path)


__all__ = [
    "DEFAULT_CONFIG_FILES",
    "EdgeConfig",
    "GraphConfig",
    "LabConfig",
    "find_default_config",
    "load_config",
]
