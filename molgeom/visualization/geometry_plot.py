"""Plots of bond-length matrices and bond-angle distributions."""

import numpy as np
from pathlib import Path
from typing import Optional, List, Tuple, Union, Sequence
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from ..molecule.internal import BondAngle
from ..workflow.runner import GeometryResult


def plot_bond_length_matrix(
    data: Union[GeometryResult, np.ndarray],
    labels: Optional[List[str]] = None,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (7, 6),
    title: Optional[str] = None,
    cmap: str = "viridis",
    annotate: bool = False,
    **kwargs
) -> Tuple[Figure, Axes]:
    """
    Heat map of a pairwise bond-length matrix.

    Args:
        data: GeometryResult with bond lengths, or an n x n matrix
        labels: Atom labels for the axes (default: symbol+index from the
            result's molecule, or plain indices)
        ax: Existing axes to plot on (creates new figure if None)
        figsize: Figure size if creating new figure
        title: Plot title
        cmap: Colormap name
        annotate: Write each distance into its cell
        **kwargs: Additional arguments passed to ax.imshow()

    Returns:
        Tuple of (Figure, Axes)
    """
    if isinstance(data, GeometryResult):
        if data.bond_lengths is None:
            raise ValueError(f"Result '{data.name}' has no bond-length matrix")
        matrix = data.bond_lengths
        if labels is None and data.molecule is not None:
            labels = [f"{sym}{i}" for i, sym in enumerate(data.molecule.symbols)]
        if title is None:
            title = f"Bond lengths: {data.name}"
    else:
        matrix = np.asarray(data, dtype=float)

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {matrix.shape}")

    n_atoms = matrix.shape[0]
    if labels is None:
        labels = [str(i) for i in range(n_atoms)]

    # Create figure if needed
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    image = ax.imshow(matrix, cmap=cmap, origin='upper', **kwargs)
    fig.colorbar(image, ax=ax, label='Distance')

    ax.set_xticks(range(n_atoms))
    ax.set_yticks(range(n_atoms))
    ax.set_xticklabels(labels, rotation=90, fontsize=9)
    ax.set_yticklabels(labels, fontsize=9)

    if annotate:
        threshold = matrix.max() / 2.0
        for i in range(n_atoms):
            for j in range(n_atoms):
                color = 'white' if matrix[i, j] < threshold else 'black'
                ax.text(j, i, f"{matrix[i, j]:.2f}", ha='center', va='center',
                        fontsize=7, color=color)

    ax.set_title(title or "Bond lengths", fontsize=14)

    plt.tight_layout()
    return fig, ax


def plot_angle_distribution(
    angles: Union[GeometryResult, Sequence[BondAngle], Sequence[float]],
    bins: int = 36,
    degrees: bool = True,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (8, 5),
    title: Optional[str] = None,
    color: str = "steelblue",
    **kwargs
) -> Tuple[Figure, Axes]:
    """
    Histogram of bond-angle values.

    Args:
        angles: GeometryResult, BondAngle records, or angles in radians
        bins: Number of histogram bins over [0, pi]
        degrees: Label and bin the x-axis in degrees
        ax: Existing axes
        figsize: Figure size
        title: Plot title
        color: Bar color
        **kwargs: Additional arguments passed to ax.hist()

    Returns:
        Tuple of (Figure, Axes)
    """
    if isinstance(angles, GeometryResult):
        if angles.bond_angles is None:
            raise ValueError(f"Result '{angles.name}' has no bond angles")
        if title is None:
            title = f"Bond angles: {angles.name}"
        angles = angles.bond_angles

    values = np.array([a.angle if isinstance(a, BondAngle) else a for a in angles],
                      dtype=float)

    upper = np.pi
    if degrees:
        values = np.degrees(values)
        upper = 180.0

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    ax.hist(values, bins=bins, range=(0.0, upper), color=color,
            edgecolor='black', alpha=0.8, **kwargs)

    ax.set_xlabel(f"Bond angle ({'degrees' if degrees else 'radians'})", fontsize=12)
    ax.set_ylabel('Count', fontsize=12)
    ax.set_title(title or "Bond-angle distribution", fontsize=14)
    ax.set_xlim(0.0, upper)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig, ax


def save_geometry_plots(
    result: GeometryResult,
    output_dir: Union[str, Path],
    stem: Optional[str] = None
) -> List[Path]:
    """
    Save bond-length and bond-angle plots for a result as PNG files.

    Args:
        result: Analysis result to plot
        output_dir: Directory for the PNG files
        stem: File name prefix (default: result.file_stem)

    Returns:
        Paths of the files written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = stem or result.file_stem
    written = []

    if result.bond_lengths is not None:
        fig, _ = plot_bond_length_matrix(result)
        path = output_dir / f"{stem}_bond_lengths.png"
        fig.savefig(path, dpi=150)
        plt.close(fig)
        written.append(path)

    if result.bond_angles:
        fig, _ = plot_angle_distribution(result)
        path = output_dir / f"{stem}_bond_angles.png"
        fig.savefig(path, dpi=150)
        plt.close(fig)
        written.append(path)

    return written
