import importlib.util
import sys
from pathlib import Path

import pandas as pd
import pytest

from omicspca.utils.io import load_json

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run_pca.py"


@pytest.fixture
def run_pca_module():
    spec = importlib.util.spec_from_file_location("run_pca", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRunPcaScript:
    """Smoke test for the command line driver"""

    def test_writes_tables_plots_and_summary(
        self, tmp_path, monkeypatch, run_pca_module, expression_matrix, sample_metadata
    ):
        expr_path = tmp_path / "expression.csv"
        meta_path = tmp_path / "samples.csv"
        outdir = tmp_path / "results"
        expression_matrix.rename_axis("gene").reset_index().to_csv(expr_path, index=False)
        sample_metadata.to_csv(meta_path, index=False)
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "run_pca.py",
                "--expression", str(expr_path),
                "--metadata", str(meta_path),
                "--outdir", str(outdir),
                "--top-n", "20",
                "--color-by", "condition",
            ],
        )

        run_pca_module.main()

        table = pd.read_csv(outdir / "pca_table.csv", index_col=0)
        variance = pd.read_csv(outdir / "variance_explained.csv")
        summary = load_json(outdir / "summary.json")
        assert list(table.index) == list(sample_metadata["sample_name"])
        assert "PC1" in table.columns
        assert list(variance.columns) == ["principal_component", "proportion_var", "cumulative_proportion_var"]
        assert len(variance) == 8
        assert (outdir / "scree.png").exists()
        assert (outdir / "biplot_PC1_PC2.png").exists()
        assert summary["n_samples"] == 8
        assert summary["n_features_used"] == 20
        assert summary["config"]["pca"]["top_n"] == 20
        assert summary["config"]["plot"]["color_by"] == "condition"
