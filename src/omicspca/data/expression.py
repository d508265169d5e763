from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from omicspca.errors import InvalidInputError

logger = logging.getLogger(__name__)


def _read_any(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".xlsx":
        return pd.read_excel(path, engine="openpyxl")
    if suffix == ".xls":
        raise InvalidInputError(f"Legacy .xls files are not supported, save {path} as .xlsx or csv.")
    if suffix in {".tsv", ".txt"}:
        return pd.read_csv(path, sep="\t")
    return pd.read_csv(path)


def load_expression_matrix(path: str | Path, feature_col: Optional[str] = None) -> pd.DataFrame:
    """
    Load a features x samples expression table.

    The feature identifiers are taken from `feature_col`, or from the first
    column when it is not given. Every other column is a sample.
    """
    path = Path(path)
    df = _read_any(path)
    if df.shape[1] == 0:
        raise InvalidInputError(f"Expression file {path} has no columns.")
    feature_col = feature_col or df.columns[0]
    if feature_col not in df.columns:
        raise InvalidInputError(f"Expected feature column {feature_col!r} in {path}, got: {list(df.columns)}")
    matrix = df.set_index(feature_col)
    matrix.index = matrix.index.astype(str)
    matrix.columns = [str(c) for c in matrix.columns]
    logger.info("Loaded expression matrix from %s with %d features x %d samples", path, *matrix.shape)
    return validate_expression_matrix(matrix)


def load_sample_metadata(path: str | Path, sample_col: str = "sample_name") -> pd.DataFrame:
    """Load per-sample metadata indexed by sample identifier."""
    path = Path(path)
    df = _read_any(path)
    meta = index_sample_metadata(df, sample_col=sample_col)
    logger.info("Loaded metadata for %d samples from %s", len(meta), path)
    return meta


def validate_expression_matrix(matrix: pd.DataFrame) -> pd.DataFrame:
    """Check that `matrix` is a non-empty numeric features x samples table."""
    if not isinstance(matrix, pd.DataFrame):
        raise InvalidInputError(f"Expression matrix must be a pandas DataFrame, got {type(matrix).__name__}.")
    n_features, n_samples = matrix.shape
    if n_features == 0:
        raise InvalidInputError("Expression matrix has no features.")
    if n_samples == 0:
        raise InvalidInputError("Expression matrix has no samples.")
    non_numeric = [c for c in matrix.columns if not pd.api.types.is_numeric_dtype(matrix[c])]
    if non_numeric:
        raise InvalidInputError(f"Expression matrix has non-numeric sample columns: {non_numeric}")
    if not np.isfinite(matrix.to_numpy(dtype=float)).all():
        raise InvalidInputError("Expression matrix contains missing or non-finite values.")
    if matrix.index.has_duplicates:
        dupes = matrix.index[matrix.index.duplicated()].unique().tolist()
        raise InvalidInputError(f"Duplicated feature identifiers: {dupes}")
    if matrix.columns.has_duplicates:
        dupes = matrix.columns[matrix.columns.duplicated()].unique().tolist()
        raise InvalidInputError(f"Duplicated sample identifiers: {dupes}")
    return matrix


def index_sample_metadata(metadata: pd.DataFrame, sample_col: str = "sample_name") -> pd.DataFrame:
    """
    Return metadata indexed by sample identifier.

    If `sample_col` is a column it becomes the index, otherwise the existing
    index is taken to hold the sample identifiers.
    """
    if not isinstance(metadata, pd.DataFrame):
        raise InvalidInputError(f"Sample metadata must be a pandas DataFrame, got {type(metadata).__name__}.")
    if sample_col in metadata.columns:
        meta = metadata.set_index(sample_col)
    else:
        meta = metadata.copy()
    meta.index = meta.index.map(str)
    meta.index.name = sample_col
    if meta.index.has_duplicates:
        dupes = meta.index[meta.index.duplicated()].unique().tolist()
        raise InvalidInputError(f"Duplicated sample identifiers in metadata: {dupes}")
    return meta
