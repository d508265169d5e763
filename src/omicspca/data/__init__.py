"""Loading and validation of expression inputs."""

from .expression import (
    load_expression_matrix,
    load_sample_metadata,
    validate_expression_matrix,
    index_sample_metadata,
)

__all__ = [
    "load_expression_matrix",
    "load_sample_metadata",
    "validate_expression_matrix",
    "index_sample_metadata",
]
