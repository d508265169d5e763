from __future__ import annotations

import logging
import numbers
from typing import Optional

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from omicspca.data.expression import index_sample_metadata, validate_expression_matrix
from omicspca.errors import InvalidInputError
from omicspca.pca.result import DecompositionResult, PcaResult, component_name
from omicspca.pca.variance import compute_variance_explained

logger = logging.getLogger(__name__)


def _check_top_n(top_n) -> int:
    if isinstance(top_n, bool) or not isinstance(top_n, numbers.Integral):
        raise InvalidInputError(f"top_n must be an integer, got {top_n!r}.")
    if top_n <= 0:
        raise InvalidInputError(f"top_n must be positive, got {top_n}.")
    return int(top_n)


def select_top_variance_features(matrix: pd.DataFrame, top_n: int) -> np.ndarray:
    """
    Positional indices of the `top_n` features with highest variance across
    samples, most variable first. Ties keep their original row order.
    """
    top_n = _check_top_n(top_n)
    values = matrix.to_numpy(dtype=float)
    if values.shape[1] > 1:
        variances = values.var(axis=1, ddof=1)
    else:
        variances = np.zeros(values.shape[0])
    order = np.argsort(-variances, kind="stable")
    selected = order[: min(top_n, len(order))]
    logger.info("Selected %d of %d features by variance", len(selected), len(order))
    return selected


def prepare_pca_matrix(matrix: pd.DataFrame, indexes: np.ndarray) -> pd.DataFrame:
    """Subset features by position and transpose to samples x features."""
    return matrix.iloc[indexes, :].T


def _join_metadata(sample_metadata: pd.DataFrame, scores: pd.DataFrame) -> pd.DataFrame:
    # full outer join keeping metadata row order, then score-only samples
    clashes = sorted(set(sample_metadata.columns) & set(scores.columns))
    if clashes:
        raise InvalidInputError(f"Sample metadata columns clash with score columns: {clashes}")
    order = list(sample_metadata.index) + [s for s in scores.index if s not in sample_metadata.index]
    table = pd.concat([sample_metadata, scores], axis=1, join="outer").reindex(order)
    table.index.name = sample_metadata.index.name
    return table


class PcaRunner:
    """Wrapper around sklearn PCA for features x samples expression data."""

    def __init__(self, top_n: int = 500, scale: bool = False):
        self.top_n = _check_top_n(top_n)
        self.scale = scale

    def _decompose(self, assay: pd.DataFrame) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        values = assay.to_numpy(dtype=float)
        if self.scale:
            zero_var = assay.columns[values.std(axis=0) == 0].tolist()
            if zero_var:
                raise InvalidInputError(f"Cannot scale constant features: {zero_var}")
            values = StandardScaler(with_mean=True, with_std=True).fit_transform(values)
        model = PCA(svd_solver="full")
        scores = model.fit_transform(values)
        return scores, model.components_.T, model.singular_values_

    def run(
        self,
        matrix: pd.DataFrame,
        sample_metadata: pd.DataFrame,
        top_n: Optional[int] = None,
        sample_col: str = "sample_name",
    ) -> PcaResult:
        """
        Run PCA on the most variable features of `matrix`.

        Args:
            matrix: features x samples expression values.
            sample_metadata: per-sample annotations, keyed by `sample_col`
                or by its index.
            top_n: number of most variable features to keep; defaults to the
                runner's setting.
            sample_col: name of the sample identifier column.

        Returns:
            PcaResult with one row per sample.
        """
        top_n = self.top_n if top_n is None else _check_top_n(top_n)
        matrix = validate_expression_matrix(matrix).copy()
        matrix.columns = matrix.columns.map(str)
        matrix.index = matrix.index.map(str)
        meta = index_sample_metadata(sample_metadata, sample_col=sample_col)
        if not meta.index.isin(matrix.columns).any():
            raise InvalidInputError(
                f"No sample identifiers in metadata match the expression matrix columns "
                f"(metadata keyed by {sample_col!r})."
            )
        missing = matrix.columns.difference(meta.index)
        if len(missing):
            logger.warning("%d samples have no metadata: %s", len(missing), list(missing))

        indexes = select_top_variance_features(matrix, top_n)
        assay = prepare_pca_matrix(matrix, indexes)
        scores, loadings, singular_values = self._decompose(assay)

        pcs = [component_name(i + 1) for i in range(scores.shape[1])]
        scores_df = pd.DataFrame(scores, index=assay.index, columns=pcs)
        scores_df.index.name = sample_col
        loadings_df = pd.DataFrame(loadings, index=assay.columns, columns=pcs)
        singular_values = np.array(singular_values, dtype=float)
        singular_values.setflags(write=False)

        decomposition = DecompositionResult(
            scores=scores_df,
            loadings=loadings_df,
            singular_values=singular_values,
            features=tuple(assay.columns),
            scaled=self.scale,
        )
        variance = compute_variance_explained(singular_values)
        table = _join_metadata(meta, scores_df)
        logger.info(
            "PCA on %d samples x %d features gave %d components (PC1 %.1f%%)",
            assay.shape[0],
            assay.shape[1],
            len(pcs),
            variance[1].proportion_var * 100,
        )
        return PcaResult(table=table, decomposition=decomposition, variance_explained=variance)


def perform_pca(
    matrix: pd.DataFrame,
    sample_metadata: pd.DataFrame,
    top_n: int = 500,
    scale: bool = False,
    sample_col: str = "sample_name",
) -> PcaResult:
    """Run PCA with a one-off PcaRunner."""
    return PcaRunner(top_n=top_n, scale=scale).run(matrix, sample_metadata, sample_col=sample_col)
