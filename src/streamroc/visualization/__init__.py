"""
Visualization utilities for streaming ROC evaluation.

Provides plotting functions for ROC curves and per-class AUC summaries.
"""

from streamroc.visualization.plots import (
    plot_class_auc,
    plot_roc_curves,
)

__all__ = [
    "plot_class_auc",
    "plot_roc_curves",
]
