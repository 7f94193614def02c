import pytest
import tempfile
import os
import numpy as np
from streamroc.data.synthetic_generator import generate_batch
from streamroc.evaluation.metrics import summarize_roc
from streamroc.evaluation.roc import ROCMultiClass
from streamroc.visualization import plot_roc_curves, plot_class_auc


def _fitted(n_classes=3, seed=42):
    roc = ROCMultiClass(threshold_steps=50)
    roc.eval(*generate_batch(300, n_classes=n_classes, seed=seed))
    return roc


def test_plot_roc_curves_saves_file():
    """Test that ROC curve plot is saved to file."""
    roc = _fitted()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "roc.png")
        plot_roc_curves(roc, output_path=output_path)
        assert os.path.exists(output_path)
        assert os.path.getsize(output_path) > 0


def test_plot_roc_curves_with_class_names():
    roc = _fitted(n_classes=2)

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "roc_named.png")
        plot_roc_curves(roc, output_path=output_path, class_names=["cat", "dog"])
        assert os.path.exists(output_path)


def test_plot_roc_curves_wrong_class_names():
    roc = _fitted(n_classes=2)
    with pytest.raises(ValueError, match="Expected 2 class names"):
        plot_roc_curves(roc, output_path="unused.png", class_names=["cat"])


def test_plot_roc_curves_unfitted():
    """Test ROC plot handles an evaluator with no data gracefully."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "empty_roc.png")
        plot_roc_curves(ROCMultiClass(threshold_steps=10), output_path=output_path)
        assert not os.path.exists(output_path)


def test_plot_roc_curves_skips_undefined_class():
    """A class with no positives is skipped rather than plotted as NaN."""
    labels = np.array([[1, 0], [0, 0], [1, 0]], dtype=float)
    predictions = np.array([[0.9, 0.1], [0.4, 0.6], [0.7, 0.3]])
    roc = ROCMultiClass(threshold_steps=10)
    roc.eval(labels, predictions)

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "partial.png")
        plot_roc_curves(roc, output_path=output_path)
        assert os.path.exists(output_path)


def test_plot_class_auc_saves_file():
    summary = summarize_roc(_fitted(n_classes=4))

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "auc.png")
        plot_class_auc(summary, output_path=output_path)
        assert os.path.exists(output_path)
        assert os.path.getsize(output_path) > 0


def test_plot_class_auc_empty_summary():
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "empty_auc.png")
        plot_class_auc(summarize_roc(ROCMultiClass(threshold_steps=10)), output_path=output_path)
        assert not os.path.exists(output_path)


def test_plot_directory_creation():
    """Test that plot functions create parent directories automatically."""
    with tempfile.TemporaryDirectory() as tmpdir:
        nested_path = os.path.join(tmpdir, "plots", "subdir", "roc.png")
        plot_roc_curves(_fitted(), output_path=nested_path)
        assert os.path.exists(nested_path)
