"""
Tests for evaluation metrics module.
"""
import json
import math
import pytest
import numpy as np
from streamroc.data.synthetic_generator import generate_batch
from streamroc.evaluation.metrics import summarize_roc, exact_auc
from streamroc.evaluation.errors import InvalidShapeError
from streamroc.evaluation.roc import ROCMultiClass


def test_summarize_roc_structure():
    """Test that summary has correct structure and types."""
    roc = ROCMultiClass(threshold_steps=50)
    roc.eval(*generate_batch(200, n_classes=3, seed=0))
    summary = summarize_roc(roc)

    assert summary["threshold_steps"] == 50
    assert summary["num_classes"] == 3
    assert summary["total_examples"] == 200
    assert len(summary["per_class"]) == 3
    assert isinstance(summary["average_auc"], float)

    for c, entry in enumerate(summary["per_class"]):
        assert entry["class"] == c
        assert 0.0 <= entry["auc"] <= 1.0
        assert entry["actual_positive"] + entry["actual_negative"] == 200


def test_summarize_roc_unfitted():
    """Unfitted evaluator gives an empty summary instead of raising."""
    summary = summarize_roc(ROCMultiClass(threshold_steps=10))
    assert summary["num_classes"] is None
    assert summary["per_class"] == []
    assert summary["average_auc"] is None


def test_summarize_roc_nan_reported_as_none():
    """Undefined AUC is reported as None so the summary is valid JSON."""
    labels = np.array([[1, 0], [1, 0]], dtype=float)
    predictions = np.array([[0.9, 0.1], [0.6, 0.4]])
    roc = ROCMultiClass(threshold_steps=10)
    roc.eval(labels, predictions)

    summary = summarize_roc(roc)
    assert summary["per_class"][0]["auc"] is None
    assert summary["average_auc"] is None
    json.dumps(summary, allow_nan=False)


def test_exact_auc_perfect_and_random():
    labels = np.array([[1, 0], [1, 0], [0, 1], [0, 1]], dtype=float)
    predictions = np.array([[0.9, 0.5], [0.8, 0.5], [0.1, 0.5], [0.2, 0.5]])
    result = exact_auc(labels, predictions)
    assert result[0] == 1.0
    assert result[1] == 0.5


def test_exact_auc_single_label_class_is_nan():
    labels = np.array([[1, 0], [1, 0]], dtype=float)
    predictions = np.array([[0.9, 0.1], [0.6, 0.4]])
    result = exact_auc(labels, predictions)
    assert all(math.isnan(v) for v in result)


def test_exact_auc_rejects_bad_shapes():
    with pytest.raises(InvalidShapeError):
        exact_auc(np.zeros((3, 2)), np.zeros((3, 3)))


def test_grid_auc_matches_exact_on_separated_scores():
    """Grid AUC equals exact AUC when no two scores share a grid cell."""
    labels = np.array([[1], [1], [0], [0]], dtype=float)
    predictions = np.array([[0.95], [0.55], [0.45], [0.05]])
    roc = ROCMultiClass(threshold_steps=10)
    roc.eval(labels, predictions)
    assert roc.calculate_auc(0) == pytest.approx(exact_auc(labels, predictions)[0])
