"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Taxonomy sources (file, HTTP, static)
- Configuration loading (YAML, environment)
- Observability (logging)
- Dataset and output file I/O

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    AppConfig,
    SourceKind,
    StatsConfig,
    load_app_config,
)
from infrastructure.sources import TaxonomySource, make_source

__all__ = [
    # Taxonomy sources (most commonly used)
    "make_source",
    "TaxonomySource",
    # Configuration (most commonly used)
    "load_app_config",
    "AppConfig",
    "SourceKind",
    "StatsConfig",
]
