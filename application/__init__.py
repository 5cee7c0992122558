"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure:
the detector facade, batch detection over title files, and evaluation.
"""

from application.batching import as_category_id, iter_segments, resolve_title_and_label_columns
from application.detector import CategoryDetector
from application.evaluation import log_evaluation_summary, run_evaluation_if_labels_available
from application.inference import run_detection
from application.serialize import attach_and_serialize_predictions, attach_predictions

__all__ = [
    # Facade
    "CategoryDetector",
    # Main workflows
    "run_detection",
    "run_evaluation_if_labels_available",
    "log_evaluation_summary",
    # Data utilities
    "iter_segments",
    "resolve_title_and_label_columns",
    "as_category_id",
    "attach_predictions",
    "attach_and_serialize_predictions",
]
