"""
Visualization utilities for permu-eda.

Diagnostic plots of distribution models; they are not part of the sampling
pipeline and only read the model.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import matplotlib.pyplot as plt

from ..distribution.model import DistributionModel


def _prepare_output_path(output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _save_figure(fig: plt.Figure, output_path: Union[str, Path]) -> None:
    path = _prepare_output_path(output_path)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def plot_distribution_model(
    model: DistributionModel,
    output_path: Union[str, Path],
    normalize: bool = True,
) -> None:
    """Heatmap of a distribution model, one row per position; out-of-domain cells are blank."""
    fig, ax = plt.subplots(figsize=(8, 6))

    if model.n_positions == 0:
        ax.text(0.5, 0.5, "Empty distribution", ha="center", va="center")
        ax.set_axis_off()
        _save_figure(fig, output_path)
        return

    if normalize:
        values = model.probabilities()
        label = "Probability"
    else:
        values = np.where(model.domain_mask(), model.counts, np.nan)
        label = "Count"

    image = ax.imshow(np.ma.masked_invalid(values), cmap="viridis", aspect="auto")
    fig.colorbar(image, ax=ax, label=label)
    state = "softened" if model.is_softened else "raw"
    ax.set_title(f"Inversion Distribution ({state}, m={model.population_size})")
    ax.set_xlabel("Value")
    ax.set_ylabel("Position")
    _save_figure(fig, output_path)


def plot_position_marginals(
    model: DistributionModel,
    output_path: Union[str, Path],
) -> None:
    """Bar chart of the most likely value and its probability at every position."""
    fig, ax = plt.subplots(figsize=(10, 5))

    if model.n_positions == 0:
        ax.text(0.5, 0.5, "Empty distribution", ha="center", va="center")
        ax.set_axis_off()
        _save_figure(fig, output_path)
        return

    probabilities = np.nan_to_num(model.probabilities(), nan=0.0)
    x = np.arange(model.n_positions)
    ax.bar(x, probabilities.max(axis=1), color="tab:blue", alpha=0.8)
    for position, value in enumerate(probabilities.argmax(axis=1)):
        ax.annotate(str(value), (position, probabilities[position, value]), ha="center", va="bottom")
    ax.set_title("Mode Probability per Position")
    ax.set_xlabel("Position")
    ax.set_ylabel("Probability")
    ax.set_ylim(0, 1.05)
    ax.grid(alpha=0.2)
    _save_figure(fig, output_path)
