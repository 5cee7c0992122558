"""Per-root-category accuracy table."""

from collections.abc import Callable

import pandas as pd

from domain.schemas import TaxonomyEntry

ROOT_TABLE_COLUMNS = ["Root category", "Total count in dataset", "Correct (count)", "Correct (%)"]
UNKNOWN_ROOT = "(unknown)"


def compute_root_category_table(
    df: pd.DataFrame,
    human_id_col: str,
    pred_id_col: str,
    lookup: Callable[[int], TaxonomyEntry | None],
) -> pd.DataFrame:
    """
    Accuracy grouped by the top-level segment of the human category.

    Args:
        df: DataFrame with human and predicted category ids
        human_id_col: Column with human category ids
        pred_id_col: Column with detected category ids (may be missing)
        lookup: Resolves an id to its taxonomy entry (None when unknown)

    Returns:
        DataFrame sorted by total count (desc), then root name
    """
    for col in [human_id_col, pred_id_col]:
        if col not in df.columns:
            raise KeyError(f"Required column '{col}' not found in DataFrame.")

    sub_df = df.dropna(subset=[human_id_col]).copy()
    if sub_df.empty:
        return pd.DataFrame(columns=ROOT_TABLE_COLUMNS)

    human_ids = sub_df[human_id_col].astype(int)

    def root_of(category_id: int) -> str:
        entry = lookup(category_id)
        return entry.path[0] if entry is not None else UNKNOWN_ROOT

    sub_df["_root"] = human_ids.map(root_of)
    sub_df["_correct"] = human_ids == pd.to_numeric(sub_df[pred_id_col], errors="coerce")

    rows: list[dict[str, object]] = []
    for root, group in sub_df.groupby("_root"):
        total = len(group)
        correct = int(group["_correct"].sum())
        rows.append(
            {
                "Root category": root,
                "Total count in dataset": total,
                "Correct (count)": correct,
                "Correct (%)": round(correct / total * 100.0, 1),
            }
        )

    result = pd.DataFrame(rows, columns=ROOT_TABLE_COLUMNS)
    return result.sort_values(
        ["Total count in dataset", "Root category"], ascending=[False, True]
    ).reset_index(drop=True)
