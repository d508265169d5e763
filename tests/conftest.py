import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from omicspca.pca import DecompositionResult, PcaResult, compute_variance_explained, component_name


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def expression_matrix():
    """50 genes x 8 samples with two groups separated on the first 10 genes."""
    rng = np.random.default_rng(0)
    values = rng.normal(loc=5.0, scale=1.0, size=(50, 8))
    values[:10, 4:] += 4.0
    genes = [f"gene_{i}" for i in range(50)]
    samples = [f"s{i}" for i in range(8)]
    return pd.DataFrame(values, index=genes, columns=samples)


@pytest.fixture
def sample_metadata():
    return pd.DataFrame(
        {
            "sample_name": [f"s{i}" for i in range(8)],
            "condition": ["control"] * 4 + ["treated"] * 4,
            "batch": ["a", "b"] * 4,
            "depth": [1.0, 1.2, 0.9, 1.1, 1.0, 1.3, 0.8, 1.05],
        }
    )


@pytest.fixture
def small_matrix():
    """4 features x 3 samples."""
    return pd.DataFrame(
        [[1.0, 2.0, 4.0], [3.0, 1.0, 0.5], [2.0, 2.5, 7.0], [0.0, 1.0, 1.5]],
        index=["g1", "g2", "g3", "g4"],
        columns=["a", "b", "c"],
    )


@pytest.fixture
def small_metadata():
    return pd.DataFrame({"sample_name": ["a", "b", "c"], "group": ["x", "x", "y"]})


@pytest.fixture
def make_result():
    """Build a PcaResult with chosen singular values, bypassing the decomposition."""

    def _make(singular_values, n_samples=4):
        singular_values = np.asarray(singular_values, dtype=float)
        pcs = [component_name(i + 1) for i in range(len(singular_values))]
        samples = [f"s{i}" for i in range(n_samples)]
        rng = np.random.default_rng(1)
        scores = pd.DataFrame(rng.normal(size=(n_samples, len(pcs))), index=samples, columns=pcs)
        loadings = pd.DataFrame(np.eye(len(pcs)), index=[f"g{i}" for i in range(len(pcs))], columns=pcs)
        decomposition = DecompositionResult(
            scores=scores,
            loadings=loadings,
            singular_values=singular_values,
            features=tuple(loadings.index),
        )
        table = scores.copy()
        table.insert(0, "group", ["x", "y"] * (n_samples // 2) + ["x"] * (n_samples % 2))
        return PcaResult(
            table=table,
            decomposition=decomposition,
            variance_explained=compute_variance_explained(singular_values),
        )

    return _make
