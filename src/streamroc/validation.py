"""
Input validation utilities for the streaming ROC pipeline.
"""
from __future__ import annotations
from typing import List, Tuple
import numpy as np
import pandas as pd

from streamroc.config import EvaluationConfig
from streamroc.evaluation.errors import InvalidLabelError, InvalidShapeError


def validate_threshold_steps(threshold_steps: int) -> None:
    """Validate threshold step count."""
    if isinstance(threshold_steps, bool) or not isinstance(threshold_steps, (int, np.integer)):
        raise ValueError(f"threshold_steps must be an integer, got {threshold_steps!r}")
    if threshold_steps <= 0:
        raise ValueError(f"threshold_steps must be positive, got {threshold_steps}")


def validate_batch_shapes(labels: np.ndarray, predictions: np.ndarray) -> None:
    """Validate that labels and predictions are matching 2-D batches."""
    if labels.ndim != 2 or predictions.ndim != 2:
        raise InvalidShapeError(
            f"Invalid input data shape: labels shape = {labels.shape}, predictions shape = "
            f"{predictions.shape}; require rank 2 arrays [batch, n_classes]"
        )
    if labels.shape[1] != predictions.shape[1]:
        raise InvalidShapeError(
            f"Number of label columns ({labels.shape[1]}) does not match number of "
            f"prediction columns ({predictions.shape[1]})"
        )
    if labels.shape[0] != predictions.shape[0]:
        raise InvalidShapeError(
            f"Number of label rows ({labels.shape[0]}) does not match number of "
            f"prediction rows ({predictions.shape[0]})"
        )
    if labels.shape[1] == 0:
        raise InvalidShapeError("Input batches must have at least one class column")


def validate_binary_labels(labels: np.ndarray) -> None:
    """Validate that every label is 0 or 1."""
    invalid = ~np.isin(labels, (0.0, 1.0))
    if invalid.any():
        raise InvalidLabelError(f"Labels must be 0 or 1: found {int(invalid.sum())} other values")


def validate_generate_params(n: int, n_classes: int, seed: int) -> None:
    """Validate parameters for synthetic dataset generation."""
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    if n > 10_000_000:
        raise ValueError(f"n exceeds reasonable bounds: {n}")
    if n_classes < 2:
        raise ValueError(f"n_classes must be >= 2, got {n_classes}")
    if seed < 0:
        raise ValueError(f"seed must be non-negative, got {seed}")


def validate_evaluation_config(cfg: EvaluationConfig) -> None:
    """Validate evaluation configuration."""
    validate_threshold_steps(cfg.threshold_steps)

    if cfg.batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {cfg.batch_size}")

    if not cfg.label_prefix or not cfg.prediction_prefix:
        raise ValueError("label_prefix and prediction_prefix must be non-empty")
    if cfg.label_prefix == cfg.prediction_prefix:
        raise ValueError(f"label_prefix and prediction_prefix must differ, both are {cfg.label_prefix!r}")


def validate_class_columns(df: pd.DataFrame, label_prefix: str, prediction_prefix: str) -> Tuple[List[str], List[str]]:
    """
    Find matching label/prediction columns in a dataframe.

    Columns are paired by suffix: ``label_0`` with ``pred_0`` and so on, in the
    order the label columns appear.
    """
    label_cols = [c for c in df.columns if c.startswith(label_prefix)]
    if not label_cols:
        raise ValueError(f"DataFrame has no label columns with prefix {label_prefix!r}")

    pred_cols = [prediction_prefix + c[len(label_prefix):] for c in label_cols]
    missing = set(pred_cols) - set(df.columns)
    if missing:
        raise ValueError(f"DataFrame missing required columns: {sorted(missing)}")

    return label_cols, pred_cols
