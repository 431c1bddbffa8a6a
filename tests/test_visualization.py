"""
Test suite for the diagnostic plots.

Validates:
- Heatmaps and marginal charts are written for learned and softened models
- Output directories are created on demand
- Zero-position models still produce a figure
"""

import matplotlib
matplotlib.use("Agg")

# Import the components to test
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from permu_eda.distribution.model import learn
from permu_eda.representations.inversion import to_inversions
from permu_eda.representations.population import INVERSION, Population
from permu_eda.utils.visualization import plot_distribution_model, plot_position_marginals


def _model(soften: bool = True):
    model = learn(to_inversions(Population.random(15, 7, 0)))
    if soften:
        model.soften()
    return model


class TestDistributionHeatmap:
    """Test the distribution heatmap."""

    def test_writes_png(self, tmp_path):
        """A heatmap of probabilities is saved to disk."""
        output_path = tmp_path / "heatmap.png"
        plot_distribution_model(_model(), output_path)
        assert output_path.exists()
        assert output_path.stat().st_size > 0

    def test_counts_and_nested_directory(self, tmp_path):
        """Raw counts can be plotted into a directory that does not exist yet."""
        output_path = tmp_path / "nested" / "dir" / "counts.png"
        plot_distribution_model(_model(soften=False), output_path, normalize=False)
        assert output_path.exists()

    def test_empty_model(self, tmp_path):
        """Models of length-1 permutations still produce a figure."""
        output_path = tmp_path / "empty.png"
        plot_distribution_model(learn(Population.zeros(3, 0, INVERSION)), output_path)
        assert output_path.exists()


class TestPositionMarginals:
    """Test the per-position mode chart."""

    def test_writes_png(self, tmp_path):
        """The mode chart is saved to disk."""
        output_path = tmp_path / "marginals.png"
        plot_position_marginals(_model(), output_path)
        assert output_path.exists()

    def test_empty_model(self, tmp_path):
        """Zero-position models produce a placeholder figure."""
        output_path = tmp_path / "empty_marginals.png"
        plot_position_marginals(learn(Population.zeros(2, 0, INVERSION)), output_path)
        assert output_path.exists()
