"""Detection accuracy metrics with confidence intervals."""

import warnings
from collections.abc import Sequence

import numpy as np
from sklearn.exceptions import UndefinedMetricWarning
from sklearn.metrics import accuracy_score, f1_score

from domain.evaluation.bootstrap import bootstrap_ci
from infrastructure.config.models import StatsConfig

NO_PREDICTION = 0  # category ids are positive; 0 marks "no match"


def top_k_hits(y_true: np.ndarray, ranked_ids: Sequence[Sequence[int]], k: int) -> np.ndarray:
    """Boolean array: is the true id among the first k ranked ids of each row."""
    if len(ranked_ids) != len(y_true):
        raise ValueError("ranked_ids must have one row per label")
    return np.array([int(t) in list(ids)[:k] for t, ids in zip(y_true, ranked_ids, strict=True)], dtype=bool)


def compute_detection_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    ranked_ids: Sequence[Sequence[int]],
    stats_cfg: StatsConfig,
) -> dict:
    """
    Compute accuracy, F1 and top-K hit rates of detected category ids, including CIs.

    Args:
        y_true: Human category ids
        y_pred: Best detected category ids (NO_PREDICTION where nothing matched)
        ranked_ids: Ranked candidate ids per row (used for top-K hit rates)
        stats_cfg: Statistics configuration (seed, n_boot, alpha, top_k_hits)

    Returns:
        Metrics dict (JSON-serializable)
    """
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)
    labels = sorted(set(y_true.tolist()))

    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=UndefinedMetricWarning)
        accuracy = float(accuracy_score(y_true, y_pred)) if len(y_true) else float("nan")
        macro_f1 = float(f1_score(y_true, y_pred, labels=labels, average="macro", zero_division=0)) if labels else 0.0
        weighted_f1 = (
            float(f1_score(y_true, y_pred, labels=labels, average="weighted", zero_division=0)) if labels else 0.0
        )

    acc_ci_low, acc_ci_high = bootstrap_ci(
        lambda yt, yp: accuracy_score(yt, yp),
        y_true,
        y_pred,
        n_boot=stats_cfg.n_boot,
        alpha=stats_cfg.alpha,
        seed=stats_cfg.seed,
    )

    metrics: dict = {
        "n_items": int(len(y_true)),
        "n_categories": len(labels),
        "coverage": float(np.mean(y_pred != NO_PREDICTION)) if len(y_pred) else 0.0,
        "accuracy": accuracy,
        "accuracy_ci_95": [acc_ci_low, acc_ci_high],
        "macro_f1": macro_f1,
        "weighted_f1": weighted_f1,
    }

    for k in stats_cfg.top_k_hits:
        hits = top_k_hits(y_true, ranked_ids, k)
        low, high = bootstrap_ci(
            lambda h: float(np.mean(h)),
            hits,
            n_boot=stats_cfg.n_boot,
            alpha=stats_cfg.alpha,
            seed=stats_cfg.seed,
        )
        metrics[f"top{k}_hit_rate"] = float(np.mean(hits)) if len(hits) else float("nan")
        metrics[f"top{k}_hit_rate_ci_95"] = [low, high]

    return metrics
