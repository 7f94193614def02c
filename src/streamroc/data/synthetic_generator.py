"""
Synthetic multi-class classifier output for testing and demonstration.

Generates:
- One-hot ground truth labels
- Softmax scores from a noisy classifier whose quality is set by ``separation``
"""
import logging
import numpy as np
import pandas as pd
from typing import Iterator, Optional, Tuple

from streamroc.validation import validate_generate_params

logger = logging.getLogger(__name__)

# Score given to the true class before softmax, in units of noise std
SEPARATION_DEFAULT = 1.5

LABEL_PREFIX = "label_"
PREDICTION_PREFIX = "pred_"


def generate_batch(
    n_samples: int,
    n_classes: int = 3,
    seed: Optional[int] = None,
    separation: float = SEPARATION_DEFAULT,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate one batch of labels and predicted class probabilities.

    Parameters
    ----------
    n_samples : int
        Number of rows. Must be positive.
    n_classes : int, optional
        Number of classes, at least 2 (default: 3).
    seed : int, optional
        Random seed for reproducibility. If None, uses random initialization.
    separation : float, optional
        Logit bonus for the true class. 0 gives an uninformative classifier
        (AUC near 0.5); larger values approach perfect separation.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(labels, predictions)``, both of shape [n_samples, n_classes]. Each
        label row is one-hot; each prediction row sums to 1.

    Examples
    --------
    >>> labels, predictions = generate_batch(500, n_classes=4, seed=0)
    >>> roc = ROCMultiClass(threshold_steps=100)
    >>> roc.eval(labels, predictions)
    """
    validate_generate_params(n_samples, n_classes, 0 if seed is None else seed)

    rng = np.random.RandomState(seed)

    classes = rng.randint(0, n_classes, size=n_samples)
    labels = np.zeros((n_samples, n_classes))
    labels[np.arange(n_samples), classes] = 1.0

    logits = rng.normal(0.0, 1.0, size=(n_samples, n_classes)) + separation * labels
    # Numerically stable softmax
    logits -= logits.max(axis=1, keepdims=True)
    exp = np.exp(logits)
    predictions = exp / exp.sum(axis=1, keepdims=True)

    return labels, predictions


def generate_dataset(
    n_samples: int,
    n_classes: int = 3,
    seed: Optional[int] = None,
    separation: float = SEPARATION_DEFAULT,
) -> pd.DataFrame:
    """
    Generate a DataFrame with ``label_<i>`` and ``pred_<i>`` columns per class.

    Predictions are rounded to 4 decimals so CSV round trips are exact.
    """
    labels, predictions = generate_batch(n_samples, n_classes, seed=seed, separation=separation)
    data = {}
    for i in range(n_classes):
        data[f"{LABEL_PREFIX}{i}"] = labels[:, i].astype(int)
    for i in range(n_classes):
        data[f"{PREDICTION_PREFIX}{i}"] = predictions[:, i].round(4)
    return pd.DataFrame(data)


def save_csv(df: pd.DataFrame, path: str) -> None:
    df.to_csv(path, index=False)
    logger.debug(f"Wrote {len(df)} rows to {path}")


def iter_batches(labels: np.ndarray, predictions: np.ndarray, batch_size: int) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
    """Yield consecutive row slices of at most ``batch_size`` rows."""
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    for start in range(0, len(labels), batch_size):
        yield labels[start:start + batch_size], predictions[start:start + batch_size]
