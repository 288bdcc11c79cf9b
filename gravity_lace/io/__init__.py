"""Output utilities."""

from gravity_lace.io.plots import plot_diagnostics

__all__ = ["plot_diagnostics"]
