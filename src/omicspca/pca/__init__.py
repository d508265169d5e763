"""PCA on expression data and the result data model."""

from .variance import VarianceRecord, VarianceExplainedSummary, compute_variance_explained
from .result import (
    DecompositionResult,
    PcaResult,
    component_name,
    parse_component_name,
    get_decomposition,
    get_variance_explained,
    get_percent_variance_label,
)
from .runner import PcaRunner, perform_pca, select_top_variance_features, prepare_pca_matrix

__all__ = [
    "VarianceRecord",
    "VarianceExplainedSummary",
    "compute_variance_explained",
    "DecompositionResult",
    "PcaResult",
    "component_name",
    "parse_component_name",
    "get_decomposition",
    "get_variance_explained",
    "get_percent_variance_label",
    "PcaRunner",
    "perform_pca",
    "select_top_variance_features",
    "prepare_pca_matrix",
]
