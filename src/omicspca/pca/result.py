from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np
import pandas as pd

from omicspca.errors import ComponentLookupError
from omicspca.pca.variance import VarianceExplainedSummary

_COMPONENT_RE = re.compile(r"^PC([1-9][0-9]*)$")


def component_name(index: int) -> str:
    """Column name of the 1-based principal component `index`."""
    return f"PC{index}"


def parse_component_name(name: str) -> int:
    """Return the 1-based index encoded in a name such as ``"PC2"``."""
    match = _COMPONENT_RE.match(str(name))
    if match is None:
        raise ComponentLookupError(f"{name!r} is not a principal component name (expected 'PC<n>').")
    return int(match.group(1))


@dataclass(frozen=True, eq=False)
class DecompositionResult:
    """Raw output of the decomposition step."""

    scores: pd.DataFrame
    loadings: pd.DataFrame
    singular_values: np.ndarray
    features: tuple[str, ...]
    scaled: bool = False

    @property
    def n_components(self) -> int:
        return len(self.singular_values)

    @property
    def sdev(self) -> np.ndarray:
        """Standard deviation of each component's scores."""
        n_samples = len(self.scores)
        return self.singular_values / np.sqrt(max(n_samples - 1, 1))


class PcaResult:
    """
    Per-sample table of metadata and PC scores, with the decomposition and
    variance summary it was built from.

    The attributes cannot be reassigned and `table` hands out a copy, so the
    table always agrees with the attached decomposition. The frames inside
    `decomposition` are shared and must be treated as read-only.
    """

    __slots__ = ("_table", "_decomposition", "_variance_explained")

    def __init__(
        self,
        table: pd.DataFrame,
        decomposition: DecompositionResult,
        variance_explained: VarianceExplainedSummary,
    ):
        self._table = table.copy()
        self._decomposition = decomposition
        self._variance_explained = variance_explained

    def __repr__(self) -> str:
        return f"PcaResult(n_samples={len(self)}, n_components={len(self._variance_explained)})"

    @property
    def table(self) -> pd.DataFrame:
        return self._table.copy()

    @property
    def decomposition(self) -> DecompositionResult:
        return self._decomposition

    @property
    def variance_explained(self) -> VarianceExplainedSummary:
        return self._variance_explained

    @property
    def component_names(self) -> list[str]:
        return [component_name(r.principal_component) for r in self.variance_explained]

    def __len__(self) -> int:
        return len(self._table)

    def __getitem__(self, column: str) -> pd.Series:
        if column not in self._table.columns:
            raise ComponentLookupError(f"Column {column!r} not in PCA result.")
        return self._table[column].copy()


def get_decomposition(result: PcaResult) -> DecompositionResult:
    return result.decomposition


def get_variance_explained(result: PcaResult) -> VarianceExplainedSummary:
    return result.variance_explained


def _format_percent(value: float) -> str:
    return f"{round(value, 2):g}"


def get_percent_variance_label(result: PcaResult, component_name: str) -> str:
    """Axis label such as ``"PC1: 45.12% variation"`` for `component_name`."""
    record = result.variance_explained[parse_component_name(component_name)]
    return f"{component_name}: {_format_percent(record.proportion_var * 100)}% variation"
