"""Text and JSON presentation of geometry results."""

import json
from typing import List, Optional

import numpy as np

from ..core.config import ReportConfig
from .runner import GeometryResult


def format_report(result: GeometryResult, config: Optional[ReportConfig] = None) -> str:
    """
    Human-readable report of one geometry result.

    Args:
        result: Result to format
        config: Precision and angle units (defaults if None)

    Returns:
        Multi-line report text
    """
    config = config or ReportConfig()
    prec = config.precision
    unit = "deg" if config.degrees else "rad"

    def angle(value: float) -> str:
        if config.degrees:
            value = np.degrees(value)
        return f"{value:.{prec}f}"

    lines: List[str] = ["=" * 60, f"Molecule: {result.name}"]
    if result.source is not None:
        lines.append(f"Source: {result.source}")

    mol = result.molecule
    if mol is not None:
        lines.append(f"Number of atoms: {mol.num_atoms}")
        lines.append("")
        lines.append("Atoms:")
        lines.append(f"  {'idx':>4s} {'tag':>4s} {'sym':>3s} "
                     f"{'x':>{prec + 6}s} {'y':>{prec + 6}s} {'z':>{prec + 6}s}")
        for idx, atom in enumerate(mol.atoms):
            lines.append(
                f"  {idx:4d} {atom.tag:4d} {atom.symbol:>3s} "
                f"{atom.x:{prec + 6}.{prec}f} {atom.y:{prec + 6}.{prec}f} "
                f"{atom.z:{prec + 6}.{prec}f}"
            )

    if result.bond_lengths is not None:
        lines.append("")
        lines.append("Bond lengths:")
        for row in result.bond_lengths:
            lines.append("  " + " ".join(f"{value:{prec + 6}.{prec}f}" for value in row))

    if result.bond_angles is not None:
        lines.append("")
        lines.append(f"Bond angles ({unit}, vertex is the middle index):")
        for rec in result.bond_angles:
            lines.append(f"  {rec.k:4d}-{rec.j:d}-{rec.i:d}  {angle(rec.angle)}")

    if result.out_of_plane:
        lines.append("")
        lines.append(f"Out-of-plane angles ({unit}):")
        for quad, sine in result.out_of_plane.items():
            value = np.arcsin(np.clip(sine, -1.0, 1.0))
            lines.append(f"  {_quad_label(quad)}  sin={sine:.{prec}f}  angle={angle(value)}")

    if result.dihedrals:
        lines.append("")
        lines.append(f"Dihedral angles ({unit}):")
        for quad, value in result.dihedrals.items():
            lines.append(f"  {_quad_label(quad)}  {angle(value)}")

    if result.errors:
        lines.append("")
        lines.append("Errors:")
        for step, message in result.errors.items():
            lines.append(f"  {step}: {message}")

    return "\n".join(lines)


def format_json(result: GeometryResult, config: Optional[ReportConfig] = None) -> str:
    """JSON report of one geometry result."""
    config = config or ReportConfig()
    return json.dumps(result.to_dict(degrees=config.degrees), indent=2)


def render(result: GeometryResult, config: Optional[ReportConfig] = None) -> str:
    """Format a result in the configured output format."""
    config = config or ReportConfig()
    if config.output_format == "json":
        return format_json(result, config)
    return format_report(result, config)


def _quad_label(quad) -> str:
    return "-".join(str(i) for i in quad)
