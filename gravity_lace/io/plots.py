"""Diagnostics chart export."""

from pathlib import Path
from typing import Sequence

import numpy as np


def plot_diagnostics(
    times: Sequence[float],
    energies: Sequence[float],
    momenta: Sequence[float],
    output_path: str,
    title: str = "",
):
    """Write a two-panel chart of relative energy drift and total momentum.

    Args:
        times: Simulation time of each sample
        energies: Total energy of each sample (first sample is the reference)
        momenta: Total momentum magnitude of each sample
        output_path: Image path (format from suffix, e.g. .png)
        title: Optional figure title
    """
    if len(times) == 0:
        raise ValueError("No samples to plot")

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "Diagnostics plots require matplotlib. Install with: pip install matplotlib"
        )

    times = np.asarray(times, dtype=np.float64)
    energies = np.asarray(energies, dtype=np.float64)
    e0 = energies[0]
    drift = (energies - e0) / abs(e0) if e0 != 0.0 else energies - e0

    fig, (ax_energy, ax_momentum) = plt.subplots(2, 1, sharex=True, figsize=(8, 6))
    ax_energy.plot(times, drift)
    ax_energy.set_ylabel("dE / |E0|")
    ax_energy.grid(True, alpha=0.3)

    ax_momentum.plot(times, np.asarray(momenta, dtype=np.float64))
    ax_momentum.set_ylabel("|P|")
    ax_momentum.set_xlabel("time")
    ax_momentum.grid(True, alpha=0.3)

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    fig.savefig(Path(output_path))
    plt.close(fig)
