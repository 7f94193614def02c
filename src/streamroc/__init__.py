"""
streamroc - Streaming multi-class ROC / AUC

Incremental one-vs-all ROC curves and AUC scores computed on a fixed threshold
grid, so results from separate batches or workers can be merged by addition.
"""

__version__ = "0.1.0"

# Expose key classes and functions at package level
from streamroc.config import EvaluationConfig, load_config
from streamroc.data.synthetic_generator import generate_batch, generate_dataset
from streamroc.data.time_series import extract_non_masked_time_steps
from streamroc.evaluation.errors import (
    InconsistentShapeError,
    InvalidClassIndexError,
    InvalidLabelError,
    InvalidShapeError,
    NotFittedError,
)
from streamroc.evaluation.metrics import exact_auc, summarize_roc
from streamroc.evaluation.roc import (
    ROCMultiClass, ROCValue, ThresholdGrid, load_evaluator, save_evaluator
)

__all__ = [
    "__version__",
    "EvaluationConfig",
    "load_config",
    "generate_batch",
    "generate_dataset",
    "extract_non_masked_time_steps",
    "InconsistentShapeError",
    "InvalidClassIndexError",
    "InvalidLabelError",
    "InvalidShapeError",
    "NotFittedError",
    "exact_auc",
    "summarize_roc",
    "ROCMultiClass",
    "ROCValue",
    "ThresholdGrid",
    "load_evaluator",
    "save_evaluator",
]
