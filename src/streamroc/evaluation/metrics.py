"""
Evaluation summaries and reporting.
"""
from __future__ import annotations
from typing import Dict, Any, List, Optional
import math
import numpy as np
from sklearn.metrics import roc_auc_score

from streamroc.evaluation.roc import ROCMultiClass
from streamroc.validation import validate_batch_shapes, validate_binary_labels


def _json_float(value: float) -> Optional[float]:
    return None if math.isnan(value) else float(value)


def summarize_roc(evaluator: ROCMultiClass) -> Dict[str, Any]:
    """
    Build a JSON-serializable report from an evaluator's accumulated counts.

    AUC values that are NaN (a class never observed as positive or never as
    negative) are reported as None.
    """
    per_class = []
    for c in range(evaluator.num_classes or 0):
        per_class.append({
            "class": c,
            "auc": _json_float(evaluator.calculate_auc(c)),
            "actual_positive": int(evaluator.count_actual_positive[c]),
            "actual_negative": int(evaluator.count_actual_negative[c]),
        })

    return {
        "threshold_steps": evaluator.threshold_steps,
        "num_classes": evaluator.num_classes,
        "total_examples": evaluator.total_examples,
        "per_class": per_class,
        "average_auc": _json_float(evaluator.calculate_average_auc()) if evaluator.is_fitted else None,
    }


def exact_auc(labels, predictions) -> List[float]:
    """
    Per-class one-vs-all AUC on an in-memory batch, using every distinct score
    as a threshold (scikit-learn ``roc_auc_score``).

    Useful for checking how close the fixed-grid approximation gets. Classes
    with a single label value give NaN.
    """
    labels = np.asarray(labels, dtype=float)
    predictions = np.asarray(predictions, dtype=float)
    validate_batch_shapes(labels, predictions)
    validate_binary_labels(labels)

    out = []
    for c in range(labels.shape[1]):
        y_true = labels[:, c]
        if np.unique(y_true).size < 2:
            out.append(float("nan"))
            continue
        out.append(float(roc_auc_score(y_true, predictions[:, c])))
    return out
