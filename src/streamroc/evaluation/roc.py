"""
ROC (Receiver Operating Characteristic) curves and AUC for multi-class classifiers.

Curves are produced one-vs-all: for N classes, N binary ROC curves. Thresholds are
a fixed grid of ``threshold_steps + 1`` evenly spaced points in [0, 1] instead of
cut points derived from the data, so counts gathered on separate batches (or on
separate machines) can be merged by addition.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional
import logging
import os
from pathlib import Path
import joblib
import numpy as np
import pandas as pd

from streamroc.data.time_series import extract_non_masked_time_steps
from streamroc.evaluation.errors import (
    InconsistentShapeError, InvalidClassIndexError, InvalidShapeError, NotFittedError
)
from streamroc.validation import (
    validate_batch_shapes, validate_binary_labels, validate_threshold_steps
)

logger = logging.getLogger(__name__)


class ROCValue(NamedTuple):
    threshold: float
    true_positive_rate: float
    false_positive_rate: float


@dataclass(frozen=True)
class ThresholdGrid:
    """Ascending thresholds ``j / steps`` for ``j`` in ``[0, steps]``."""
    steps: int
    thresholds: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        validate_threshold_steps(self.steps)
        thresholds = np.arange(self.steps + 1, dtype=float) / self.steps
        thresholds.flags.writeable = False
        object.__setattr__(self, "thresholds", thresholds)

    def __len__(self) -> int:
        return self.steps + 1

    def __iter__(self):
        return iter(self.thresholds.tolist())


class ConfusionAccumulator:
    """
    Running counts for every (class, threshold) pair.

    ``true_positive`` and ``false_positive`` have shape [n_classes, n_thresholds];
    ``actual_positive`` and ``actual_negative`` have shape [n_classes].
    """

    def __init__(self, n_classes: int, n_thresholds: int):
        self.actual_positive = np.zeros(n_classes, dtype=np.int64)
        self.actual_negative = np.zeros(n_classes, dtype=np.int64)
        self.true_positive = np.zeros((n_classes, n_thresholds), dtype=np.int64)
        self.false_positive = np.zeros((n_classes, n_thresholds), dtype=np.int64)

    @property
    def n_classes(self) -> int:
        return len(self.actual_positive)

    def update(self, labels: np.ndarray, predictions: np.ndarray, thresholds: np.ndarray) -> None:
        # Batch counts are built first and added at the end
        is_positive = labels == 1
        is_negative = labels == 0
        batch_tp = np.zeros_like(self.true_positive)
        batch_fp = np.zeros_like(self.false_positive)

        for c in range(self.n_classes):
            # [rows, thresholds]: predicted positive iff prediction >= threshold
            predicted_positive = predictions[:, c, np.newaxis] >= thresholds[np.newaxis, :]
            batch_tp[c] = (predicted_positive & is_positive[:, c, np.newaxis]).sum(axis=0)
            batch_fp[c] = (predicted_positive & is_negative[:, c, np.newaxis]).sum(axis=0)

        self.actual_positive += is_positive.sum(axis=0)
        self.actual_negative += is_negative.sum(axis=0)
        self.true_positive += batch_tp
        self.false_positive += batch_fp

    def add(self, other: "ConfusionAccumulator") -> None:
        if other.true_positive.shape != self.true_positive.shape:
            raise InconsistentShapeError(
                f"Cannot add counts of shape {other.true_positive.shape} to counts of shape "
                f"{self.true_positive.shape}"
            )
        self.actual_positive += other.actual_positive
        self.actual_negative += other.actual_negative
        self.true_positive += other.true_positive
        self.false_positive += other.false_positive

    def copy(self) -> "ConfusionAccumulator":
        out = ConfusionAccumulator(self.n_classes, self.true_positive.shape[1])
        out.add(self)
        return out


class ROCMultiClass:
    """
    One-vs-all ROC for multi-class classifiers using a fixed threshold grid.

    Parameters
    ----------
    threshold_steps : int
        Number of threshold steps; the grid holds ``threshold_steps + 1`` points
        spaced ``1.0 / threshold_steps`` apart.

    Examples
    --------
    >>> roc = ROCMultiClass(threshold_steps=100)
    >>> for labels, predictions in batches:
    ...     roc.eval(labels, predictions)
    >>> roc.calculate_average_auc()
    """

    def __init__(self, threshold_steps: int):
        self.grid = ThresholdGrid(threshold_steps)
        self._counts: Optional[ConfusionAccumulator] = None

    def __repr__(self) -> str:
        return f"ROCMultiClass(threshold_steps={self.threshold_steps}, num_classes={self.num_classes})"

    @property
    def threshold_steps(self) -> int:
        return self.grid.steps

    @property
    def num_classes(self) -> Optional[int]:
        return None if self._counts is None else self._counts.n_classes

    @property
    def is_fitted(self) -> bool:
        return self._counts is not None

    @property
    def count_actual_positive(self) -> np.ndarray:
        self._assert_has_been_fit()
        return self._counts.actual_positive.copy()

    @property
    def count_actual_negative(self) -> np.ndarray:
        self._assert_has_been_fit()
        return self._counts.actual_negative.copy()

    @property
    def total_examples(self) -> int:
        if self._counts is None:
            return 0
        return int(self._counts.actual_positive[0] + self._counts.actual_negative[0])

    def eval(self, labels, predictions) -> None:
        """
        Collect statistics for one minibatch.

        Parameters
        ----------
        labels : array-like
            Shape [batch, n_classes], values 0 or 1. 3-D time series input
            [batch, n_classes, time] is routed to ``eval_time_series``.
        predictions : array-like
            Same shape as ``labels``, scores in [0, 1].

        Raises
        ------
        InvalidShapeError
            Inputs are not 2-D or their shapes differ.
        InvalidLabelError
            Labels contain values other than 0 and 1.
        InconsistentShapeError
            The number of classes differs from the first evaluated batch.
        """
        labels = _as_float_array(labels, "labels")
        predictions = _as_float_array(predictions, "predictions")

        if labels.ndim == 3 and predictions.ndim == 3:
            self.eval_time_series(labels, predictions)
            return

        validate_batch_shapes(labels, predictions)
        validate_binary_labels(labels)

        n_classes = labels.shape[1]
        if self._counts is not None and self._counts.n_classes != n_classes:
            raise InconsistentShapeError(
                f"Cannot evaluate data: number of label classes does not match previous call. "
                f"Got {n_classes} classes (from array shape {labels.shape}) vs. expected "
                f"number of label classes = {self._counts.n_classes}"
            )

        if self._counts is None:
            self._counts = ConfusionAccumulator(n_classes, len(self.grid))
            logger.debug(f"Initialized ROC counts: {n_classes} classes x {len(self.grid)} thresholds")

        self._counts.update(labels, predictions, self.grid.thresholds)
        logger.debug(f"Evaluated batch of {labels.shape[0]} rows")

    def eval_time_series(self, labels, predictions, mask=None) -> None:
        """
        Collect statistics for 3-D time series data [batch, n_classes, time], with
        an optional [batch, time] mask of 0/1 values. Masked steps are skipped.
        """
        labels_2d, predictions_2d = extract_non_masked_time_steps(labels, predictions, mask)
        self.eval(labels_2d, predictions_2d)

    def merge(self, other: "ROCMultiClass") -> None:
        """Add the counts collected by ``other`` into this instance."""
        if not isinstance(other, ROCMultiClass):
            raise TypeError(f"Cannot merge {type(other).__name__} into ROCMultiClass")
        if other.threshold_steps != self.threshold_steps:
            raise ValueError(
                f"Cannot merge: threshold_steps differ ({self.threshold_steps} vs {other.threshold_steps})"
            )
        if other._counts is None:
            return
        if self._counts is None:
            self._counts = other._counts.copy()
            return
        if other._counts.n_classes != self._counts.n_classes:
            raise InconsistentShapeError(
                f"Cannot merge: number of classes differ ({self._counts.n_classes} vs {other._counts.n_classes})"
            )
        self._counts.add(other._counts)

    def get_results(self, class_idx: int) -> List[ROCValue]:
        """
        Get the ROC curve for one class, as a list of points in ascending threshold order.

        Rates for a class never observed as positive (or never as negative) are NaN.
        """
        fpr, tpr = self.get_results_as_array(class_idx)
        return [
            ROCValue(t, float(tp_rate), float(fp_rate))
            for t, tp_rate, fp_rate in zip(self.grid, tpr, fpr)
        ]

    def get_results_as_array(self, class_idx: int) -> np.ndarray:
        """
        Get the ROC curve as a [2, threshold_steps + 1] array: row 0 holds false
        positive rates, row 1 true positive rates.
        """
        self._assert_has_been_fit(class_idx)
        counts = self._counts
        with np.errstate(divide="ignore", invalid="ignore"):
            tpr = counts.true_positive[class_idx] / float(counts.actual_positive[class_idx])
            fpr = counts.false_positive[class_idx] / float(counts.actual_negative[class_idx])
        return np.vstack([fpr, tpr])

    def get_counts(self, class_idx: int) -> pd.DataFrame:
        """Raw per-threshold counts and rates for one class."""
        fpr, tpr = self.get_results_as_array(class_idx)
        return pd.DataFrame({
            "threshold": self.grid.thresholds,
            "true_positive": self._counts.true_positive[class_idx],
            "false_positive": self._counts.false_positive[class_idx],
            "true_positive_rate": tpr,
            "false_positive_rate": fpr,
        })

    def calculate_auc(self, class_idx: int) -> float:
        """
        Calculate the AUC (Area Under Curve) for one class by trapezoidal integration
        over consecutive grid points.
        """
        fpr, tpr = self.get_results_as_array(class_idx)
        # FPR falls as the threshold rises, but is not assumed monotonic
        delta_x = np.abs(np.diff(fpr))
        avg_y = (tpr[:-1] + tpr[1:]) / 2.0
        return float(np.sum(delta_x * avg_y))

    def calculate_average_auc(self) -> float:
        """Average (one-vs-all) AUC over all classes."""
        self._assert_has_been_fit()
        aucs = [self.calculate_auc(c) for c in range(self.num_classes)]
        return float(np.mean(aucs))

    def _assert_has_been_fit(self, class_idx: Optional[int] = None) -> None:
        if self._counts is None:
            raise NotFittedError("Cannot get results: no data has been collected")
        if class_idx is None:
            return
        if isinstance(class_idx, bool) or not isinstance(class_idx, (int, np.integer)):
            raise InvalidClassIndexError(f"Class index must be an integer, got {class_idx!r}")
        if class_idx < 0 or class_idx >= self._counts.n_classes:
            raise InvalidClassIndexError(
                f"Invalid class index ({class_idx}): must be in range 0 to numClasses = {self._counts.n_classes}"
            )


def _as_float_array(values, name: str) -> np.ndarray:
    try:
        return np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidShapeError(f"Could not convert {name} to a numeric array: {e}") from e


def save_evaluator(evaluator: ROCMultiClass, path: str) -> None:
    """
    Save evaluator state (threshold grid and counts) to disk using joblib.

    Saved states from different workers can be loaded and combined with
    ``ROCMultiClass.merge``.
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(evaluator, path)


def load_evaluator(path: str) -> ROCMultiClass:
    """
    Load evaluator state from disk.

    Raises
    ------
    FileNotFoundError
        If no file exists at ``path``.
    TypeError
        If the file does not hold a ROCMultiClass.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Evaluator state file not found: {path}")
    evaluator = joblib.load(path)
    if not isinstance(evaluator, ROCMultiClass):
        raise TypeError(f"File {path} does not contain a ROCMultiClass (got {type(evaluator).__name__})")
    return evaluator
