"""
Reshaping of padded, masked time series batches into flat 2-D batches.
"""
from __future__ import annotations
from typing import Tuple
import numpy as np

from streamroc.evaluation.errors import InvalidShapeError


def extract_non_masked_time_steps(labels, predictions, mask=None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Flatten 3-D time series labels/predictions into 2-D arrays.

    Parameters
    ----------
    labels : array-like
        Shape [batch, n_classes, time_steps].
    predictions : array-like
        Same shape as ``labels``.
    mask : array-like, optional
        Shape [batch, time_steps], 1 for a valid step, 0 for padding.
        If None, every step is kept.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(labels_2d, predictions_2d)``, each of shape [n_valid_steps, n_classes].
        Rows are ordered by example, then by time step.

    Raises
    ------
    InvalidShapeError
        If inputs are not 3-D, shapes disagree, or the mask does not line up
        with the batch and time axes.
    """
    labels = np.asarray(labels, dtype=float)
    predictions = np.asarray(predictions, dtype=float)

    if labels.ndim != 3 or predictions.ndim != 3:
        raise InvalidShapeError(
            f"Time series input must be 3-D [batch, classes, time]: labels shape = {labels.shape}, "
            f"predictions shape = {predictions.shape}"
        )
    if labels.shape != predictions.shape:
        raise InvalidShapeError(
            f"Labels and predictions shapes differ: {labels.shape} vs {predictions.shape}"
        )

    n_batch, n_classes, n_steps = labels.shape
    # [batch, classes, time] -> [batch, time, classes] -> [batch*time, classes]
    labels_2d = labels.transpose(0, 2, 1).reshape(n_batch * n_steps, n_classes)
    predictions_2d = predictions.transpose(0, 2, 1).reshape(n_batch * n_steps, n_classes)

    if mask is None:
        return labels_2d, predictions_2d

    mask = np.asarray(mask)
    if mask.shape != (n_batch, n_steps):
        raise InvalidShapeError(
            f"Mask shape {mask.shape} does not match [batch, time] = {(n_batch, n_steps)}"
        )
    if not np.isin(mask, (0, 1)).all():
        raise InvalidShapeError("Mask values must be 0 or 1")

    keep = mask.reshape(n_batch * n_steps).astype(bool)
    return labels_2d[keep], predictions_2d[keep]
