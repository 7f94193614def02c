import pytest
import numpy as np
from streamroc.data.synthetic_generator import generate_batch, generate_dataset, iter_batches

def test_generate_batch_shapes():
    labels, predictions = generate_batch(200, n_classes=4, seed=123)
    assert labels.shape == (200, 4)
    assert predictions.shape == (200, 4)
    assert set(np.unique(labels)).issubset({0.0, 1.0})
    np.testing.assert_array_equal(labels.sum(axis=1), np.ones(200))
    np.testing.assert_allclose(predictions.sum(axis=1), np.ones(200))
    assert ((predictions >= 0) & (predictions <= 1)).all()

def test_generate_batch_reproducible():
    a = generate_batch(50, n_classes=3, seed=7)
    b = generate_batch(50, n_classes=3, seed=7)
    np.testing.assert_array_equal(a[0], b[0])
    np.testing.assert_array_equal(a[1], b[1])

def test_generate_batch_invalid_params():
    with pytest.raises(ValueError, match="n must be positive"):
        generate_batch(0, n_classes=3)
    with pytest.raises(ValueError, match="n_classes must be >= 2"):
        generate_batch(10, n_classes=1)

def test_generate_dataset_columns():
    df = generate_dataset(100, n_classes=3, seed=1)
    assert len(df) == 100
    assert list(df.columns) == ["label_0", "label_1", "label_2", "pred_0", "pred_1", "pred_2"]
    assert set(df["label_0"].unique()).issubset({0, 1})
    assert df[["pred_0", "pred_1", "pred_2"]].stack().between(0, 1).all()

def test_iter_batches_covers_all_rows():
    labels, predictions = generate_batch(25, n_classes=2, seed=0)
    sizes = [len(l) for l, p in iter_batches(labels, predictions, 10)]
    assert sizes == [10, 10, 5]

def test_iter_batches_invalid_size():
    labels, predictions = generate_batch(5, n_classes=2, seed=0)
    with pytest.raises(ValueError, match="batch_size must be positive"):
        list(iter_batches(labels, predictions, 0))
