"""
Taxonomy sources.

Adapters for wherever the raw taxonomy text lives:
- File (bundled copy on disk)
- HTTP (official taxonomy URL, via httpx)
- Static (in-memory text, for testing)

All sources implement the TaxonomySource interface.
"""

from infrastructure.sources.base import TaxonomySource
from infrastructure.sources.factory import make_source
from infrastructure.sources.file import FileTaxonomySource
from infrastructure.sources.http import HttpTaxonomySource
from infrastructure.sources.static import StaticTaxonomySource

__all__ = [
    # Abstract base
    "TaxonomySource",
    # Concrete implementations
    "FileTaxonomySource",
    "HttpTaxonomySource",
    "StaticTaxonomySource",
    # Factory (most commonly used)
    "make_source",
]
