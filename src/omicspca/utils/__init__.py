"""Utility helpers for omicspca."""

from .io import ensure_dir, save_table, load_table, save_json, load_json, save_figure
from .logging import setup_logging

__all__ = [
    "ensure_dir",
    "save_table",
    "load_table",
    "save_json",
    "load_json",
    "save_figure",
    "setup_logging",
]
