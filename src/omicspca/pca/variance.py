from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence

import numpy as np
import pandas as pd

from omicspca.errors import ComponentLookupError, InvalidInputError


@dataclass(frozen=True)
class VarianceRecord:
    principal_component: int
    proportion_var: float
    cumulative_proportion_var: float


class VarianceExplainedSummary:
    """
    Proportion and cumulative proportion of variance per principal component.

    Records are keyed by their 1-based component index and iterate in index
    order.
    """

    def __init__(self, records: Sequence[VarianceRecord]):
        self._records: Mapping[int, VarianceRecord] = {r.principal_component: r for r in records}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[VarianceRecord]:
        return iter(self._records.values())

    def __contains__(self, index: object) -> bool:
        return index in self._records

    def __getitem__(self, index: int) -> VarianceRecord:
        try:
            return self._records[index]
        except KeyError:
            raise ComponentLookupError(
                f"No principal component {index}; summary has components 1..{len(self)}"
            ) from None

    def __repr__(self) -> str:
        return f"VarianceExplainedSummary(n_components={len(self)})"

    @property
    def proportion_var(self) -> np.ndarray:
        return np.array([r.proportion_var for r in self])

    @property
    def cumulative_proportion_var(self) -> np.ndarray:
        return np.array([r.cumulative_proportion_var for r in self])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "principal_component": [r.principal_component for r in self],
                "proportion_var": self.proportion_var,
                "cumulative_proportion_var": self.cumulative_proportion_var,
            }
        )


def compute_variance_explained(singular_values: Sequence[float]) -> VarianceExplainedSummary:
    """
    Derive the variance explained by each component from singular values.

    The proportion for component i is s_i^2 / sum(s_j^2). All-zero singular
    values carry no variance to distribute and raise InvalidInputError.
    """
    values = np.asarray(singular_values, dtype=float)
    if values.ndim != 1:
        raise InvalidInputError(f"Singular values must be one-dimensional, got shape {values.shape}.")
    if values.size == 0:
        raise InvalidInputError("At least one singular value is required.")
    if not np.isfinite(values).all():
        raise InvalidInputError("Singular values must be finite.")
    if (values < 0).any():
        raise InvalidInputError("Singular values must be non-negative.")

    largest = values.max()
    if largest == 0:
        raise InvalidInputError("All singular values are zero; the data has no variance.")

    # normalise first so squaring cannot underflow or overflow
    squared = (values / largest) ** 2
    proportions = squared / squared.sum()
    cumulative = np.cumsum(proportions)
    records = [
        VarianceRecord(
            principal_component=i + 1,
            proportion_var=float(p),
            cumulative_proportion_var=float(c),
        )
        for i, (p, c) in enumerate(zip(proportions, cumulative))
    ]
    return VarianceExplainedSummary(records)
