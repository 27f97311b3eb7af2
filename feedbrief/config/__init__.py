"""Configuration management for feedbrief."""

from .loader import Config, default_config_path, load_config, save_config
from .models import (
    ConfigModel,
    ExtractionConfig,
    FeedsConfig,
    PipelineConfig,
    ServerConfig,
    SourceConfig,
    SummarizerConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "ExtractionConfig",
    "FeedsConfig",
    "PipelineConfig",
    "ServerConfig",
    "SourceConfig",
    "SummarizerConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
