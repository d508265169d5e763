"""PCA and plotting helpers for gene expression data."""

from .errors import ComponentLookupError, InvalidInputError
from .pca import (
    DecompositionResult,
    PcaResult,
    PcaRunner,
    VarianceExplainedSummary,
    compute_variance_explained,
    get_decomposition,
    get_percent_variance_label,
    get_variance_explained,
    perform_pca,
)
from .plotting import PointStyle, plot_biplot, plot_scree

__version__ = "0.1.0"

__all__ = [
    "ComponentLookupError",
    "InvalidInputError",
    "DecompositionResult",
    "PcaResult",
    "PcaRunner",
    "VarianceExplainedSummary",
    "compute_variance_explained",
    "get_decomposition",
    "get_percent_variance_label",
    "get_variance_explained",
    "perform_pca",
    "PointStyle",
    "plot_biplot",
    "plot_scree",
]
