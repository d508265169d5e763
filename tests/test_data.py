import pandas as pd
import pytest

from omicspca.data import index_sample_metadata, load_expression_matrix, load_sample_metadata
from omicspca.errors import InvalidInputError


class TestExpressionLoading:
    def test_load_csv(self, tmp_path, small_matrix):
        path = tmp_path / "expr.csv"
        small_matrix.rename_axis("gene").reset_index().to_csv(path, index=False)

        matrix = load_expression_matrix(path)

        assert list(matrix.index) == ["g1", "g2", "g3", "g4"]
        assert list(matrix.columns) == ["a", "b", "c"]
        assert matrix.loc["g3", "c"] == 7.0

    def test_load_tsv_with_named_feature_column(self, tmp_path, small_matrix):
        path = tmp_path / "expr.tsv"
        small_matrix.rename_axis("gene_id").reset_index().to_csv(path, sep="\t", index=False)

        matrix = load_expression_matrix(path, feature_col="gene_id")

        assert matrix.shape == (4, 3)

    def test_load_parquet(self, tmp_path, small_matrix):
        path = tmp_path / "expr.parquet"
        small_matrix.rename_axis("gene").reset_index().to_parquet(path, index=False)

        matrix = load_expression_matrix(path)

        assert list(matrix.index) == ["g1", "g2", "g3", "g4"]
        pd.testing.assert_frame_equal(matrix, small_matrix, check_names=False)

    def test_load_xlsx(self, tmp_path, small_matrix):
        path = tmp_path / "expr.xlsx"
        small_matrix.rename_axis("gene").reset_index().to_excel(path, index=False, engine="openpyxl")

        matrix = load_expression_matrix(path)

        assert list(matrix.columns) == ["a", "b", "c"]
        assert matrix.loc["g2", "c"] == 0.5

    def test_legacy_xls_rejected(self, tmp_path):
        path = tmp_path / "expr.xls"
        path.write_bytes(b"\xd0\xcf\x11\xe0")

        with pytest.raises(InvalidInputError):
            load_expression_matrix(path)

    def test_missing_feature_column(self, tmp_path, small_matrix):
        path = tmp_path / "expr.csv"
        small_matrix.reset_index().to_csv(path, index=False)

        with pytest.raises(InvalidInputError):
            load_expression_matrix(path, feature_col="gene_id")

    def test_duplicated_features(self, tmp_path):
        path = tmp_path / "expr.csv"
        pd.DataFrame({"gene": ["g1", "g1"], "a": [1.0, 2.0], "b": [3.0, 4.0]}).to_csv(path, index=False)

        with pytest.raises(InvalidInputError):
            load_expression_matrix(path)


class TestSampleMetadata:
    def test_load_metadata(self, tmp_path, small_metadata):
        path = tmp_path / "meta.csv"
        small_metadata.to_csv(path, index=False)

        meta = load_sample_metadata(path)

        assert list(meta.index) == ["a", "b", "c"]
        assert meta.index.name == "sample_name"
        assert list(meta.columns) == ["group"]

    def test_custom_sample_column(self):
        frame = pd.DataFrame({"id": [1, 2], "group": ["x", "y"]})

        meta = index_sample_metadata(frame, sample_col="id")

        assert list(meta.index) == ["1", "2"]

    def test_rejects_non_frame(self):
        with pytest.raises(InvalidInputError):
            index_sample_metadata({"sample_name": ["a"]})
