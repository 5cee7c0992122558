"""
Domain layer: taxonomy matching logic with minimal external dependencies.

Contains:
- schemas: Pydantic models for taxonomy entries and detection results
- taxonomy: Text normalization, taxonomy parsing, errors
- similarity: TF-IDF index and ranking
- evaluation: Metrics computation and statistical analysis
"""

from domain.schemas import Candidate, CategoryMatch, TaxonomyEntry

__all__ = [
    "TaxonomyEntry",
    "Candidate",
    "CategoryMatch",
]
