"""Prediction serialization utilities."""

import logging
from pathlib import Path

import pandas as pd

from application.batching import as_category_id
from application.constants import (
    HUMAN_CATEGORY_KEY,
    ORIGINAL_INDEX_KEY,
    PRED_ID_COL,
    PRED_PATH_COL,
    PRED_PROBABILITY_COL,
    PRED_RANKED_IDS_COL,
    TITLE_KEY,
    TOP_CANDIDATES_KEY,
)
from domain.schemas import Candidate
from infrastructure.io.fs import write_json

logger = logging.getLogger(__name__)


def _best(ranked: dict[int, list[Candidate]], idx: int) -> Candidate | None:
    candidates = ranked.get(idx) or []
    return candidates[0] if candidates else None


def attach_predictions(df: pd.DataFrame, ranked: dict[int, list[Candidate]]) -> pd.DataFrame:
    """Return a copy of df with best-category columns and the ranked id list attached."""
    df_out = df.copy()
    best = [_best(ranked, idx) for idx in df_out.index]

    df_out[PRED_ID_COL] = pd.array([c.id if c else None for c in best], dtype="Int64")
    df_out[PRED_PATH_COL] = [c.breadcrumb if c else None for c in best]
    df_out[PRED_PROBABILITY_COL] = [c.probability if c else None for c in best]
    df_out[PRED_RANKED_IDS_COL] = [[c.id for c in ranked.get(idx) or []] for idx in df_out.index]
    return df_out


def attach_and_serialize_predictions(
    df: pd.DataFrame,
    title_col: str,
    label_col: str | None,
    ranked: dict[int, list[Candidate]],
    predictions_path: Path,
) -> tuple[pd.DataFrame, Path]:
    """
    Attach predictions to the DataFrame and write predictions_path as a JSON list of records.
    """
    df_out = attach_predictions(df, ranked)

    records: list[dict] = []
    for idx, row in df_out.iterrows():
        record: dict[str, object] = {}

        if ORIGINAL_INDEX_KEY in df_out.columns:
            record[ORIGINAL_INDEX_KEY] = row[ORIGINAL_INDEX_KEY]

        title = row[title_col]
        record[TITLE_KEY] = str(title) if pd.notna(title) else ""
        record[HUMAN_CATEGORY_KEY] = as_category_id(row[label_col]) if label_col is not None else None

        best = _best(ranked, idx)
        record[PRED_ID_COL] = best.id if best else None
        record[PRED_PATH_COL] = best.breadcrumb if best else None
        record[PRED_PROBABILITY_COL] = best.probability if best else None
        record[TOP_CANDIDATES_KEY] = [c.model_dump(mode="json") for c in ranked.get(idx) or []]

        records.append(record)

    write_json(predictions_path, records)
    logger.info("Saved predictions JSON: %s", predictions_path)

    return df_out, predictions_path
