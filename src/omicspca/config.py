from dataclasses import dataclass, field
from typing import Optional, Any
import yaml


@dataclass
class PcaConfig:
    top_n: int = 500
    scale: bool = False
    sample_col: str = "sample_name"


@dataclass
class PlotConfig:
    x_component: str = "PC1"
    y_component: str = "PC2"
    color_by: Optional[str] = None
    shape_by: Optional[str] = None
    size_by: Optional[str] = None
    palette: Optional[str] = None
    figure_size: list[float] = field(default_factory=lambda: [6.0, 4.5])
    style: str = "whitegrid"
    dpi: int = 300
    output_format: str = "png"


@dataclass
class OutputConfig:
    results_dir: str = "outputs/pca"
    table_file: str = "pca_table.csv"
    variance_file: str = "variance_explained.csv"
    summary_file: str = "summary.json"


@dataclass
class AnalysisConfig:
    pca: PcaConfig = field(default_factory=PcaConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _dict_to_dataclass(cls: Any, data: Optional[dict]):
    return cls(**(data or {}))


def load_config(path: str) -> AnalysisConfig:
    """Load YAML config from path into AnalysisConfig dataclasses."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level.")
    pca_cfg = _dict_to_dataclass(PcaConfig, raw.get("pca"))
    plot_cfg = _dict_to_dataclass(PlotConfig, raw.get("plot"))
    output_cfg = _dict_to_dataclass(OutputConfig, raw.get("output"))
    return AnalysisConfig(pca=pca_cfg, plot=plot_cfg, output=output_cfg)


def config_to_dict(cfg: AnalysisConfig) -> dict:
    """Convert AnalysisConfig to a serializable dict."""
    return {
        "pca": dict(cfg.pca.__dict__),
        "plot": dict(cfg.plot.__dict__),
        "output": dict(cfg.output.__dict__),
    }
