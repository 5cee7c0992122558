"""
Similarity index: TF-IDF term vectors, cosine scoring and softmax calibration.

Pure in-process computation; no I/O.
"""

from domain.similarity.index import DetectorOptions, SimilarityIndex, category_tokens
from domain.similarity.vectors import TermVector, TfidfModel, fit_tfidf, softmax

__all__ = [
    "SimilarityIndex",
    "DetectorOptions",
    "TermVector",
    "category_tokens",
    "TfidfModel",
    "fit_tfidf",
    "softmax",
]
