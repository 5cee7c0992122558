"""Evaluation workflow and summary logging."""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from application.batching import as_category_id
from application.constants import PRED_ID_COL, PRED_RANKED_IDS_COL
from application.detector import CategoryDetector
from domain.evaluation.metrics import NO_PREDICTION, compute_detection_metrics
from domain.evaluation.tables import compute_root_category_table
from domain.schemas import TaxonomyEntry
from infrastructure.config.models import AppConfig

logger = logging.getLogger(__name__)

HUMAN_ID_COL = "_human_category_id"


def run_evaluation_if_labels_available(
    cfg: AppConfig,
    detector: CategoryDetector,
    df_out: pd.DataFrame,
    label_col: str | None,
) -> tuple[dict, pd.DataFrame | None]:
    """
    Compute metrics if human category ids are present; otherwise return empty metrics.

    Rows whose label is missing or not a positive integer are left out. Labels that
    are not in the loaded taxonomy are kept (they count as misses) and reported.

    Args:
        cfg: AppConfig instance
        detector: Loaded detector (resolves ids to root categories)
        df_out: DataFrame with predictions attached
        label_col: Name of the human category id column (optional)

    Returns:
        Tuple of (metrics dict, root category table DataFrame)
    """
    if label_col is None:
        logger.info("No human labels provided; skipping metric computation.")
        return {}, None

    eval_df = df_out.copy()
    eval_df[HUMAN_ID_COL] = eval_df[label_col].map(as_category_id)
    n_unlabelled = int(eval_df[HUMAN_ID_COL].isna().sum())
    eval_df = eval_df.dropna(subset=[HUMAN_ID_COL])
    if n_unlabelled:
        logger.warning("Skipping %d row(s) without a valid category id in '%s'", n_unlabelled, label_col)

    if eval_df.empty:
        logger.info("No labelled rows left; skipping metric computation.")
        return {}, None

    y_true = eval_df[HUMAN_ID_COL].astype(int).to_numpy()
    y_pred = eval_df[PRED_ID_COL].fillna(NO_PREDICTION).astype(int).to_numpy()
    ranked_ids = eval_df[PRED_RANKED_IDS_COL].tolist()

    metrics = compute_detection_metrics(y_true, y_pred, ranked_ids, cfg.stats)

    def lookup(category_id: int) -> TaxonomyEntry | None:
        try:
            return detector.get_category(category_id)
        except KeyError:
            return None

    unknown = sorted({int(t) for t in np.unique(y_true) if lookup(int(t)) is None})
    metrics["unknown_label_ids"] = unknown
    if unknown:
        logger.warning("%d labelled id(s) are not in the loaded taxonomy: %s", len(unknown), unknown[:10])

    root_df = compute_root_category_table(eval_df, HUMAN_ID_COL, PRED_ID_COL, lookup)
    logger.info("Accuracy: %.4f", metrics["accuracy"])
    return metrics, root_df


def log_evaluation_summary(
    metrics: dict,
    root_df: pd.DataFrame | None,
    predictions_path: Path,
    metrics_path: Path,
) -> None:
    """
    Log a concise, human-readable evaluation summary.

    Args:
        metrics: Dictionary of computed metrics (may be empty)
        root_df: Per-root-category table (optional)
        predictions_path: Path to predictions JSON file
        metrics_path: Path to metrics JSON file
    """
    logger.info("=== Evaluation Summary ===")

    if metrics:
        ci = metrics["accuracy_ci_95"]
        logger.info(
            "Items: %d | Coverage: %.3f | Accuracy: %.3f (95%% CI %.3f-%.3f) | Macro-F1: %.3f",
            metrics["n_items"],
            metrics["coverage"],
            metrics["accuracy"],
            ci[0],
            ci[1],
            metrics["macro_f1"],
        )
        for key in sorted(k for k in metrics if k.endswith("_hit_rate")):
            low, high = metrics[f"{key}_ci_95"]
            logger.info("%s: %.3f (95%% CI %.3f-%.3f)", key, metrics[key], low, high)
    else:
        logger.info("No evaluation metrics (no human labels).")

    if root_df is not None and not root_df.empty:
        logger.debug("Accuracy by root category:\n%s", root_df.to_string(index=False))

    logger.info("Predictions: %s", predictions_path)
    logger.info("Metrics: %s", metrics_path)
