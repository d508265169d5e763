from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from omicspca.errors import ComponentLookupError
from omicspca.pca.result import PcaResult, get_percent_variance_label


@dataclass(frozen=True)
class PointStyle:
    """Result columns mapped onto point color, marker shape and size."""

    color: Optional[str] = None
    shape: Optional[str] = None
    size: Optional[str] = None
    palette: Optional[str] = None
    point_size: Optional[float] = None

    def mapped_columns(self) -> list[str]:
        return [c for c in (self.color, self.shape, self.size) if c is not None]


def plot_biplot(
    result: PcaResult,
    x_component: str = "PC1",
    y_component: str = "PC2",
    point_style: Optional[PointStyle] = None,
    figure_size: Optional[Sequence[float]] = None,
    ax: Optional[Axes] = None,
) -> Figure:
    """
    Scatter samples on two principal components.

    Axis labels carry the percent variation of each component. Raises
    ComponentLookupError if a component or a styled column is missing.
    """
    x_label = get_percent_variance_label(result, x_component)
    y_label = get_percent_variance_label(result, y_component)
    style = point_style or PointStyle()
    table = result.table
    missing = [c for c in style.mapped_columns() if c not in table.columns]
    if missing:
        raise ComponentLookupError(f"Point style columns not in PCA result: {missing}")

    if ax is None:
        fig, ax = plt.subplots(figsize=tuple(figure_size) if figure_size else (6, 4.5))
    else:
        fig = ax.get_figure()

    kwargs = {}
    if style.point_size is not None:
        kwargs["s"] = style.point_size
    sns.scatterplot(
        data=table,
        x=x_component,
        y=y_component,
        hue=style.color,
        style=style.shape,
        size=style.size,
        palette=style.palette,
        ax=ax,
        **kwargs,
    )
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    fig.tight_layout()
    return fig
