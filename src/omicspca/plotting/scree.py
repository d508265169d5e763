from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import MaxNLocator

from omicspca.pca.result import PcaResult, get_variance_explained


def _identity(values):
    return values


def plot_scree(
    result: PcaResult,
    figure_size: Optional[Sequence[float]] = None,
    ax: Optional[Axes] = None,
) -> Figure:
    """
    Scree plot of a PCA result.

    Bars show the proportion of variance for each component; the line shows
    the cumulative proportion, read against the right-hand axis. Both axes
    share one scale.
    """
    summary = get_variance_explained(result).to_frame()
    if ax is None:
        fig, ax = plt.subplots(figsize=tuple(figure_size) if figure_size else (6, 4.5))
    else:
        fig = ax.get_figure()
    bar_color, line_color = sns.color_palette(n_colors=2)

    ax.bar(
        summary["principal_component"],
        summary["proportion_var"],
        color=bar_color,
        label="Proportion variance",
    )
    ax.plot(
        summary["principal_component"],
        summary["cumulative_proportion_var"],
        color=line_color,
        marker="o",
        label="Cumulative proportion variance",
    )
    ax.set_xlabel("Principal component")
    ax.set_ylabel("Proportion variance")
    ax.xaxis.set_major_locator(MaxNLocator(integer=True, steps=[1, 2, 5, 10]))
    ax.set_ylim(bottom=0)

    secondary = ax.secondary_yaxis("right", functions=(_identity, _identity))
    secondary.set_ylabel("Cumulative proportion variance")
    fig.tight_layout()
    return fig
