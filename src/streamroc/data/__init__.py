"""
Data generation and reshaping utilities for streaming ROC evaluation.
"""

from streamroc.data.synthetic_generator import generate_batch, generate_dataset, iter_batches
from streamroc.data.time_series import extract_non_masked_time_steps

__all__ = ["generate_batch", "generate_dataset", "iter_batches", "extract_non_masked_time_steps"]
