"""
Configuration management: models, loading, and validation.

Handles:
- AppConfig: Main detector configuration
- Source configs: file, HTTP, static taxonomy sources
- Detection options and evaluation statistics
- Environment variable overrides

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_app_config, load_source_config
from infrastructure.config.models import (
    # Main config
    AppConfig,
    # Batch columns
    DataColumnsConfig,
    DetectionConfig,
    # Source configs
    FileSourceConfig,
    HttpSourceConfig,
    SourceConfig,
    # Enums
    SourceKind,
    StaticSourceConfig,
    # Stats config
    StatsConfig,
)

__all__ = [
    # Main config (most commonly used)
    "AppConfig",
    "load_app_config",
    # Enums
    "SourceKind",
    # Sources
    "SourceConfig",
    "FileSourceConfig",
    "HttpSourceConfig",
    "StaticSourceConfig",
    "load_source_config",
    # Detection
    "DetectionConfig",
    # Data columns
    "DataColumnsConfig",
    # Stats
    "StatsConfig",
]
