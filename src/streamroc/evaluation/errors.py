"""
Exception types raised by the streaming ROC evaluator.
"""
from __future__ import annotations
from sklearn.exceptions import NotFittedError as _SklearnNotFittedError


class StreamROCError(Exception):
    """Base class for evaluator errors."""


class InvalidShapeError(StreamROCError, ValueError):
    """Input batch is not 2-D or labels/predictions shapes disagree."""


class InconsistentShapeError(StreamROCError, ValueError):
    """Batch class count differs from the count fixed by the first batch."""


class InvalidLabelError(StreamROCError, ValueError):
    """Label values other than 0 or 1 were supplied."""


class NotFittedError(StreamROCError, _SklearnNotFittedError):
    """A result was requested before any data was evaluated."""


class InvalidClassIndexError(StreamROCError, IndexError, ValueError):
    """Class index outside [0, num_classes)."""
