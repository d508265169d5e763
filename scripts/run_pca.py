"""
Run PCA on an expression table and save plots.

Usage:
    python scripts/run_pca.py \
        --expression data/expression.csv \
        --metadata data/samples.csv \
        --config configs/default.yaml \
        --outdir outputs/pca
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import seaborn as sns

from omicspca.config import AnalysisConfig, config_to_dict, load_config
from omicspca.data import load_expression_matrix, load_sample_metadata
from omicspca.pca import PcaRunner, get_variance_explained
from omicspca.plotting import PointStyle, plot_biplot, plot_scree
from omicspca.utils.io import ensure_dir, save_figure, save_json, save_table
from omicspca.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="PCA of an expression matrix with scree plot and biplot.")
    parser.add_argument("--expression", required=True, help="Features x samples table; first column holds feature ids.")
    parser.add_argument("--metadata", required=True, help="Per-sample metadata table.")
    parser.add_argument("--config", default=None, help="Path to config YAML.")
    parser.add_argument("--outdir", default=None, help="Output directory (overrides config).")
    parser.add_argument("--top-n", type=int, default=None, help="Number of most variable features to keep.")
    parser.add_argument("--color-by", default=None, help="Metadata column mapped to point color.")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main():
    args = parse_args()
    setup_logging(args.log_level)
    cfg = load_config(args.config) if args.config else AnalysisConfig()
    if args.top_n is not None:
        cfg.pca.top_n = args.top_n
    if args.outdir is not None:
        cfg.output.results_dir = args.outdir
    if args.color_by is not None:
        cfg.plot.color_by = args.color_by

    outdir = Path(cfg.output.results_dir)
    ensure_dir(outdir)
    sns.set_style(cfg.plot.style)

    matrix = load_expression_matrix(args.expression)
    metadata = load_sample_metadata(args.metadata, sample_col=cfg.pca.sample_col)
    runner = PcaRunner(top_n=cfg.pca.top_n, scale=cfg.pca.scale)
    result = runner.run(matrix, metadata, sample_col=cfg.pca.sample_col)

    save_table(result.table, outdir / cfg.output.table_file)
    variance = get_variance_explained(result).to_frame()
    save_table(variance, outdir / cfg.output.variance_file, index=False)

    ext = cfg.plot.output_format
    scree_path = save_figure(
        plot_scree(result, figure_size=cfg.plot.figure_size),
        outdir / f"scree.{ext}",
        dpi=cfg.plot.dpi,
    )
    style = PointStyle(
        color=cfg.plot.color_by,
        shape=cfg.plot.shape_by,
        size=cfg.plot.size_by,
        palette=cfg.plot.palette,
    )
    biplot_path = save_figure(
        plot_biplot(
            result,
            x_component=cfg.plot.x_component,
            y_component=cfg.plot.y_component,
            point_style=style,
            figure_size=cfg.plot.figure_size,
        ),
        outdir / f"biplot_{cfg.plot.x_component}_{cfg.plot.y_component}.{ext}",
        dpi=cfg.plot.dpi,
    )

    save_json(
        {
            "config": config_to_dict(cfg),
            "n_samples": len(result),
            "n_features_used": len(result.decomposition.features),
            "variance_explained": variance.to_dict("records"),
            "plots": {"scree": str(scree_path), "biplot": str(biplot_path)},
        },
        outdir / cfg.output.summary_file,
    )
    logger.info("PCA complete. Results saved to %s", outdir)


if __name__ == "__main__":
    main()
