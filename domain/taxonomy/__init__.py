"""
Taxonomy handling: text normalization, taxonomy file parsing and errors.

All functions in this module are pure (no file or network I/O).
"""

from domain.taxonomy.errors import IndexNotReadyError, NoMatchError, TaxonomyError, TaxonomyLoadError
from domain.taxonomy.loader import index_entries_by_id, parse_taxonomy_text
from domain.taxonomy.normalizer import STOPWORDS, normalize_text, tokenize

__all__ = [
    "STOPWORDS",
    "normalize_text",
    "tokenize",
    "parse_taxonomy_text",
    "index_entries_by_id",
    "TaxonomyError",
    "IndexNotReadyError",
    "NoMatchError",
    "TaxonomyLoadError",
]
