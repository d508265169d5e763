"""Scree plots and biplots for PCA results."""

from .scree import plot_scree
from .biplot import PointStyle, plot_biplot

__all__ = ["plot_scree", "PointStyle", "plot_biplot"]
