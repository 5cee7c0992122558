"""
Evaluation of detected categories against human-labelled category ids.

Provides:
- Accuracy, F1 and top-K hit rates
- Bootstrap confidence intervals
- Per-root-category accuracy tables

All functions are pure (depend only on numpy, pandas, sklearn).
"""

from domain.evaluation.bootstrap import bootstrap_ci
from domain.evaluation.metrics import NO_PREDICTION, compute_detection_metrics, top_k_hits
from domain.evaluation.tables import compute_root_category_table

__all__ = [
    "NO_PREDICTION",
    "compute_detection_metrics",
    "top_k_hits",
    "bootstrap_ci",
    "compute_root_category_table",
]
