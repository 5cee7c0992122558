"""Batch detection workflow over a table of item titles."""

import logging

import pandas as pd

from application.batching import iter_segments
from application.detector import CategoryDetector
from domain.schemas import Candidate
from domain.similarity.index import DetectorOptions
from infrastructure.observability.logging import clear_batch_context, set_log_context

logger = logging.getLogger(__name__)


def run_detection(
    detector: CategoryDetector,
    df: pd.DataFrame,
    title_col: str,
    *,
    batch_size: int | None = None,
    options: DetectorOptions | None = None,
) -> dict[int, list[Candidate]]:
    """
    Rank categories for every title in df.

    Titles are processed in segments so progress shows up in the logs with a
    batch tag. Empty/missing titles still produce a (zero-score) ranking.
    Without explicit options the ranking uses the options of `detect_category`,
    so the first candidate is the detector's best category.

    Args:
        detector: Loaded CategoryDetector
        df: DataFrame holding the titles
        title_col: Column with item titles
        batch_size: Titles per logged batch (None = one batch)
        options: Detection options (defaults to the detector's category options)

    Returns:
        Mapping DataFrame index -> ranked candidates (possibly empty)
    """
    titles = df[title_col].fillna("").astype(str).tolist()
    indices = df.index.tolist()
    opts = options or detector.category_options
    ranked: dict[int, list[Candidate]] = {}

    logger.info("Total titles: %d", len(titles))

    for batch_id, (start, end) in enumerate(iter_segments(len(titles), batch_size), start=1):
        set_log_context(batch_id=batch_id)
        logger.info("Processing batch %d (items %d to %d of %d)...", batch_id, start, end - 1, len(titles))

        matched = 0
        for idx, title in zip(indices[start:end], titles[start:end], strict=True):
            candidates = detector.detect(title, opts)
            ranked[idx] = candidates
            if candidates and candidates[0].score > 0:
                matched += 1

        logger.info("Batch %d: %d/%d titles with a non-zero best score", batch_id, matched, end - start)

    clear_batch_context()
    return ranked
