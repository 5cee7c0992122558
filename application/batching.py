"""Title column resolution and batching utilities."""

import logging

import pandas as pd

from infrastructure.config.models import AppConfig

logger = logging.getLogger(__name__)


def resolve_title_and_label_columns(
    cfg: AppConfig,
    df: pd.DataFrame,
) -> tuple[str, str | None]:
    """
    Resolve the title column (required) and the human category id column (optional).

    Args:
        cfg: AppConfig instance
        df: Titles DataFrame

    Returns:
        Tuple of (title_col, label_col) where label_col may be None

    Raises:
        KeyError: If the configured title column is not in the DataFrame
    """
    title_col = cfg.columns.title_col
    label_col = cfg.columns.label_col

    if title_col not in df.columns:
        raise KeyError(f"Configured title_col='{title_col}' not found in dataset columns: {list(df.columns)}")

    if label_col is None:
        return title_col, None

    if label_col not in df.columns:
        logger.warning(
            "Configured label_col='%s' not found in dataset. Proceeding without labels (evaluation will be skipped).",
            label_col,
        )
        return title_col, None

    return title_col, label_col


def iter_segments(n_items: int, batch_size: int | None) -> list[tuple[int, int]]:
    """
    Return (start, end) index pairs for segmenting a list of length n_items.

    Args:
        n_items: Total number of items to segment
        batch_size: Size of each batch, or None for a single segment

    Raises:
        ValueError: If batch_size is not positive
    """
    if batch_size is not None and batch_size <= 0:
        raise ValueError("batch_size must be a positive integer or None")

    if batch_size is None:
        return [(0, n_items)] if n_items else []

    return [(start, min(start + batch_size, n_items)) for start in range(0, n_items, batch_size)]


def as_category_id(value: object) -> int | None:
    """
    Coerce a human label cell to a category id.

    Accepts ints, integral floats (pandas upcasts columns with gaps) and numeric strings.
    Returns None for missing/blank/non-numeric values.
    """
    if value is None:
        return None
    if isinstance(value, float) and value != value:  # NaN
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not number.is_integer() or number <= 0:
        return None
    return int(number)
