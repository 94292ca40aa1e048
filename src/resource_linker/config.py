"""Configuration settings for the resource linker."""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class LinkerConfig:
    """Configuration class for linker generation settings."""
    
    # Generated artifact naming
    linker_suffix: str = "Linker"
    path_parameters_suffix: str = "PathParameters"
    query_parameters_suffix: str = "QueryParameters"
    
    # Output settings
    output_dir: Optional[str] = None
    
    # Graph export settings
    export_graph: bool = False
    graph_file_name: str = "resources.dot"
    
    log_level: str = "INFO"
    
    def __post_init__(self):
        """Let the environment override file and constructor values."""
        env_graph = os.getenv("RESOURCE_LINKER_GRAPH")
        env_level = os.getenv("RESOURCE_LINKER_LOG_LEVEL")
        env_output = os.getenv("RESOURCE_LINKER_OUTPUT_DIR")
        
        if env_graph:
            self.export_graph = env_graph.strip().lower() in _TRUTHY
        if env_level:
            self.log_level = env_level.strip().upper()
        if env_output:
            self.output_dir = env_output
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "linker_suffix": self.linker_suffix,
            "path_parameters_suffix": self.path_parameters_suffix,
            "query_parameters_suffix": self.query_parameters_suffix,
            "output_dir": self.output_dir,
            "export_graph": self.export_graph,
            "graph_file_name": self.graph_file_name,
            "log_level": self.log_level,
        }
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "LinkerConfig":
        """Create configuration from dictionary."""
        return cls(**config_dict)
