"""
Internal coordinates derived from Cartesian positions.

Builds the pairwise bond-length matrix and enumerates every distinct
three-atom bond angle of a molecule. Bonds here are purely geometric
distances; no connectivity is inferred.
"""

import logging
from typing import List, NamedTuple

import numpy as np
from scipy.special import comb

from .geometry import AtomCollection, bond_angle, distance
from ..core.constants import DEFAULT_TOLERANCE
from ..core.exceptions import DegenerateGeometry, InsufficientAtoms

logger = logging.getLogger(__name__)


class BondAngle(NamedTuple):
    """
    One enumerated bond angle.

    Indices satisfy k < j < i; the vertex is always the middle index j,
    whatever the actual shape of the molecule.
    """
    k: int
    j: int
    i: int
    angle: float

    @property
    def indices(self):
        """Index triple (k, j, i)."""
        return (self.k, self.j, self.i)

    @property
    def degrees(self) -> float:
        """Angle in degrees."""
        return float(np.degrees(self.angle))


def angle_count(n_atoms: int) -> int:
    """
    Number of distinct bond angles for n_atoms atoms, C(n, 3).

    Equal to the (n-2)-th trigonal pyramidal number; 0 when n_atoms < 3.
    """
    if n_atoms < 3:
        return 0
    return int(comb(n_atoms, 3, exact=True))


def bond_length_matrix(atoms: AtomCollection) -> np.ndarray:
    """
    Symmetric matrix of all pairwise distances.

    Only the lower triangle is computed; each entry is mirrored into the upper
    triangle and the diagonal stays zero.

    Args:
        atoms: Molecule or sequence of Atom

    Returns:
        n x n float array, entry (i, j) = distance(atoms[i], atoms[j])

    Raises:
        InsufficientAtoms: If fewer than two atoms are given
    """
    n_atoms = len(atoms)
    if n_atoms <= 1:
        raise InsufficientAtoms(
            "No bonds possible in a single-atom or empty system",
            required=2, found=n_atoms
        )

    lengths = np.zeros((n_atoms, n_atoms))
    for i in range(n_atoms):
        for j in range(i):
            length = distance(atoms[i], atoms[j])
            lengths[i, j] = length
            lengths[j, i] = length

    logger.debug(f"Computed {n_atoms * (n_atoms - 1) // 2} bond lengths")
    return lengths


def bond_angles(
    atoms: AtomCollection,
    tol: float = DEFAULT_TOLERANCE
) -> List[BondAngle]:
    """
    Enumerate every distinct unordered atom triple with its bond angle.

    Triples are visited with i ascending, then j < i, then k < j, which is
    also the order of the returned list. Each record holds the angle at atom j
    between the arms to atoms i and k.

    Args:
        atoms: Molecule or sequence of Atom
        tol: Separations at or below this count as coincident atoms

    Returns:
        List of C(n, 3) BondAngle records

    Raises:
        InsufficientAtoms: If fewer than three atoms are given
        DegenerateGeometry: If two atoms of any triple coincide
    """
    n_atoms = len(atoms)
    if n_atoms <= 2:
        raise InsufficientAtoms(
            "Too few atoms for any angle",
            required=3, found=n_atoms
        )

    angles = []
    for i in range(n_atoms):
        for j in range(i):
            for k in range(j):
                try:
                    angle = bond_angle(atoms[i], atoms[j], atoms[k], tol=tol)
                except DegenerateGeometry as e:
                    raise DegenerateGeometry(str(e), indices=(k, j, i)) from e
                angles.append(BondAngle(k, j, i, angle))

    logger.debug(f"Computed {len(angles)} bond angles for {n_atoms} atoms")
    return angles
