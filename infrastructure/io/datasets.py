"""Title dataset loading utilities."""

from pathlib import Path

import pandas as pd

SUPPORTED_SUFFIXES = (".csv", ".tsv", ".xlsx", ".xls")


def read_table(path: Path) -> pd.DataFrame:
    """
    Read a table of item titles based on file extension.

    Supported formats:
    - CSV: .csv
    - TSV: .tsv
    - Excel: .xlsx, .xls

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If file format is not supported
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in (".xlsx", ".xls"):
        return pd.read_excel(path)
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".tsv":
        return pd.read_csv(path, sep="\t")
    raise ValueError(f"Unsupported file format: {suffix}. Supported formats: {', '.join(SUPPORTED_SUFFIXES)}")
