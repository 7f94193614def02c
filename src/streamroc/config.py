"""
Evaluation configuration and YAML loading.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional
import yaml


@dataclass
class EvaluationConfig:
    threshold_steps: int = 100
    batch_size: int = 1000  # rows per chunk when streaming a CSV
    label_prefix: str = "label_"
    prediction_prefix: str = "pred_"
    plot_path: Optional[str] = None


def load_config(path: str) -> EvaluationConfig:
    """
    Load an EvaluationConfig from a YAML file.

    Keys missing from the file keep their defaults. Unknown keys raise ValueError.

    Examples
    --------
    >>> # config.yaml
    >>> # threshold_steps: 200
    >>> # batch_size: 5000
    >>> cfg = load_config("config.yaml")
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(EvaluationConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {sorted(unknown)}")

    return EvaluationConfig(**raw)
