"""Molecular structure handling, geometry primitives, and internal coordinates."""

from .structure import Atom, Molecule
from .geometry import (
    displacement,
    distance,
    bond_angle,
    out_of_plane,
    out_of_plane_angle,
    dihedral_angle,
    calculate_distance,
    calculate_angle,
    calculate_out_of_plane,
    calculate_dihedral,
)
from .internal import BondAngle, angle_count, bond_length_matrix, bond_angles
from .io import (
    parse_geometry,
    read_geometry,
    write_geometry,
    read_xyz,
    read_molecule,
)

__all__ = [
    "Atom",
    "Molecule",
    "displacement",
    "distance",
    "bond_angle",
    "out_of_plane",
    "out_of_plane_angle",
    "dihedral_angle",
    "calculate_distance",
    "calculate_angle",
    "calculate_out_of_plane",
    "calculate_dihedral",
    "BondAngle",
    "angle_count",
    "bond_length_matrix",
    "bond_angles",
    "parse_geometry",
    "read_geometry",
    "write_geometry",
    "read_xyz",
    "read_molecule",
]
