"""
Plotting functions for ROC curves and per-class AUC.
"""
from typing import Dict, Any, Optional, Sequence
import matplotlib.pyplot as plt
import numpy as np
from pathlib import Path

from streamroc.evaluation.roc import ROCMultiClass


def _finish(output_path: Optional[str]) -> None:
    plt.tight_layout()

    if output_path:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(output_path, dpi=300, bbox_inches='tight')
        plt.close()
    else:
        plt.show()


def plot_roc_curves(
    evaluator: ROCMultiClass,
    output_path: Optional[str] = None,
    class_names: Optional[Sequence[str]] = None,
    title: str = "One-vs-All ROC Curves",
    figsize: tuple = (8, 7)
) -> None:
    """
    Plot one ROC curve per class, labelled with its AUC.

    Classes whose curve is undefined (never observed as positive, or never as
    negative) are skipped.

    Parameters
    ----------
    evaluator : ROCMultiClass
        Evaluator that has collected at least one batch.
    output_path : Optional[str]
        File path to save plot (e.g., "plots/roc.png").
        If None, displays plot interactively.
    class_names : Optional[Sequence[str]]
        Legend names per class. Defaults to "Class 0", "Class 1", ...
    title : str, optional
        Plot title (default: "One-vs-All ROC Curves")
    figsize : tuple, optional
        Figure size in inches (width, height) (default: (8, 7))

    Examples
    --------
    >>> from streamroc.visualization import plot_roc_curves
    >>> plot_roc_curves(roc, output_path="roc.png", class_names=["cat", "dog", "bird"])
    """
    n_classes = evaluator.num_classes
    if n_classes is None:
        print("No data evaluated - cannot create ROC plot")
        return
    if class_names is None:
        class_names = [f"Class {c}" for c in range(n_classes)]
    if len(class_names) != n_classes:
        raise ValueError(f"Expected {n_classes} class names, got {len(class_names)}")

    fig, ax = plt.subplots(figsize=figsize)
    colors = plt.cm.tab10(np.linspace(0, 1, max(n_classes, 2)))

    for c in range(n_classes):
        fpr, tpr = evaluator.get_results_as_array(c)
        if np.isnan(fpr).any() or np.isnan(tpr).any():
            continue
        auc = evaluator.calculate_auc(c)
        ax.plot(fpr, tpr, '-', color=colors[c], linewidth=2,
                label=f'{class_names[c]} (AUC = {auc:.3f})')

    # Chance reference
    ax.plot([0, 1], [0, 1], 'k--', label='Chance', linewidth=1.5, alpha=0.7)

    ax.set_xlabel('False Positive Rate', fontsize=12)
    ax.set_ylabel('True Positive Rate', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='lower right', fontsize=10)
    ax.grid(True, alpha=0.3)
    ax.set_xlim(-0.05, 1.05)
    ax.set_ylim(-0.05, 1.05)

    _finish(output_path)


def plot_class_auc(
    summary: Dict[str, Any],
    output_path: Optional[str] = None,
    title: str = "Per-Class AUC",
    figsize: tuple = (10, 6)
) -> None:
    """
    Bar chart of per-class AUC with the average AUC as a reference line.

    Parameters
    ----------
    summary : Dict[str, Any]
        Output from summarize_roc().
    output_path : Optional[str]
        File path to save plot. If None, displays plot interactively.
    """
    per_class = [p for p in summary.get("per_class", []) if p["auc"] is not None]
    if not per_class:
        print("No AUC values to visualize")
        return

    classes = [p["class"] for p in per_class]
    aucs = [p["auc"] for p in per_class]

    fig, ax = plt.subplots(figsize=figsize)
    x_pos = np.arange(len(classes))
    colors = plt.cm.viridis(np.linspace(0.3, 0.9, len(classes)))

    bars = ax.bar(x_pos, aucs, color=colors, edgecolor='black', linewidth=0.5)

    for bar, val in zip(bars, aucs):
        ax.text(bar.get_x() + bar.get_width()/2., val, f'{val:.3f}',
                ha='center', va='bottom', fontsize=9)

    average = summary.get("average_auc")
    if average is not None:
        ax.axhline(y=average, color='gray', linestyle='--', alpha=0.7, linewidth=1,
                   label=f'Average = {average:.3f}')
        ax.legend(loc='lower right', fontsize=10)

    ax.set_xticks(x_pos)
    ax.set_xticklabels([f'Class {c}' for c in classes])
    ax.set_ylabel('AUC', fontsize=12)
    ax.set_ylim(0, 1.05)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(axis='y', alpha=0.3)

    _finish(output_path)
