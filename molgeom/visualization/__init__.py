"""Visualization module for molecular geometry results.

Provides plotting functions for:
- Bond-length matrices
- Bond-angle distributions
"""

from .geometry_plot import (
    plot_bond_length_matrix,
    plot_angle_distribution,
    save_geometry_plots,
)

__all__ = [
    "plot_bond_length_matrix",
    "plot_angle_distribution",
    "save_geometry_plots",
]
