"""Geometry calculations: distances, bond angles, out-of-plane angles, dihedrals."""

import numpy as np
from typing import Sequence, Union

from .structure import Molecule, Atom
from ..core.constants import DEFAULT_TOLERANCE
from ..core.exceptions import DegenerateGeometry

AtomCollection = Union[Molecule, Sequence[Atom]]


def displacement(a: Atom, b: Atom) -> np.ndarray:
    """
    Vector pointing from atom a to atom b.

    Args:
        a, b: Atoms

    Returns:
        (b.x - a.x, b.y - a.y, b.z - a.z) as a numpy array
    """
    return b.position - a.position


def distance(a: Atom, b: Atom) -> float:
    """
    Euclidean distance between two atoms.

    Symmetric and non-negative; zero only for coincident positions.
    """
    return float(np.linalg.norm(a.position - b.position))


def bond_angle(
    atom_i: Atom,
    atom_j: Atom,
    atom_k: Atom,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """
    Calculate angle i-j-k (angle at atom j) in radians.

    The angle is taken between the arm from j to i and the arm from j to k,
    so the result lies in [0, pi].

    Args:
        atom_i, atom_j, atom_k: Atoms (angle vertex at atom_j)
        tol: Separations at or below this count as coincident atoms

    Returns:
        Angle in radians

    Raises:
        DegenerateGeometry: If any two of the three atoms coincide
    """
    v_ji = displacement(atom_j, atom_i)
    v_jk = displacement(atom_j, atom_k)

    norm_ji = np.linalg.norm(v_ji)
    norm_jk = np.linalg.norm(v_jk)

    if norm_ji <= tol or norm_jk <= tol:
        raise DegenerateGeometry(
            "Bond angle undefined: vertex atom coincides with an arm atom"
        )
    if distance(atom_i, atom_k) <= tol:
        raise DegenerateGeometry(
            "Bond angle undefined: atoms i and k coincide"
        )

    # Rounding can push |cos| just past 1 for (anti)parallel arms
    cos_angle = np.clip(np.dot(v_ji, v_jk) / (norm_ji * norm_jk), -1.0, 1.0)
    return float(np.arccos(cos_angle))


def out_of_plane(
    atom_i: Atom,
    atom_j: Atom,
    atom_k: Atom,
    atom_l: Atom,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """
    Sine of the angle between the k-i arm and the j-k-l plane.

    Uses the scalar triple product r_ki . (r_kj x r_kl), normalised by the
    three arm lengths and sin(phi), where phi is the j-k-l angle at k.
    Callers that need the angle itself should use out_of_plane_angle.

    Args:
        atom_i: Atom tested against the plane
        atom_j, atom_k, atom_l: Atoms defining the plane (reference vertex k)
        tol: Arm lengths and sin(phi) at or below this count as zero

    Returns:
        Signed value in [-1, 1]; 0 when atom_i lies in the plane

    Raises:
        DegenerateGeometry: For zero-length arms or colinear j, k, l
    """
    phi = bond_angle(atom_j, atom_k, atom_l, tol=tol)
    sin_phi = np.sin(phi)

    r_kj = displacement(atom_k, atom_j)
    r_kl = displacement(atom_k, atom_l)
    r_ki = displacement(atom_k, atom_i)

    norm_ki = np.linalg.norm(r_ki)
    if norm_ki <= tol:
        raise DegenerateGeometry(
            "Out-of-plane angle undefined: atom i coincides with the vertex"
        )
    if abs(sin_phi) <= tol:
        raise DegenerateGeometry(
            "Out-of-plane angle undefined: reference atoms j, k, l are colinear"
        )

    triple = np.dot(r_ki, np.cross(r_kj, r_kl))
    denominator = np.linalg.norm(r_kj) * np.linalg.norm(r_kl) * norm_ki * sin_phi
    return float(triple / denominator)


def out_of_plane_angle(
    atom_i: Atom,
    atom_j: Atom,
    atom_k: Atom,
    atom_l: Atom,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """Out-of-plane angle in radians, in [-pi/2, pi/2]."""
    sine = out_of_plane(atom_i, atom_j, atom_k, atom_l, tol=tol)
    return float(np.arcsin(np.clip(sine, -1.0, 1.0)))


def dihedral_angle(
    atom_i: Atom,
    atom_j: Atom,
    atom_k: Atom,
    atom_l: Atom,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """
    Calculate dihedral angle i-j-k-l in radians.

    The dihedral angle is the angle between the i-j-k plane and the j-k-l plane.

    Returns:
        Dihedral angle in radians, in range [-pi, pi]

    Raises:
        DegenerateGeometry: If i-j-k or j-k-l is colinear
    """
    # Vectors along the bonds
    b1 = displacement(atom_i, atom_j)
    b2 = displacement(atom_j, atom_k)
    b3 = displacement(atom_k, atom_l)

    # Normal vectors to the planes
    n1 = np.cross(b1, b2)
    n2 = np.cross(b2, b3)

    n1_norm = np.linalg.norm(n1)
    n2_norm = np.linalg.norm(n2)

    if n1_norm <= tol or n2_norm <= tol:
        raise DegenerateGeometry(
            "Dihedral angle undefined: three consecutive atoms are colinear"
        )

    n1 = n1 / n1_norm
    n2 = n2 / n2_norm
    b2_unit = b2 / np.linalg.norm(b2)

    # atan2 keeps the sign and the correct quadrant
    m1 = np.cross(n1, b2_unit)
    x = np.dot(n1, n2)
    y = np.dot(m1, n2)
    return float(np.arctan2(y, x))


def calculate_distance(atoms: AtomCollection, i: int, j: int) -> float:
    """
    Calculate distance between two atoms by index.

    Args:
        atoms: Molecule or sequence of Atom
        i, j: Atom indices

    Returns:
        Distance in the input length units
    """
    return distance(atoms[i], atoms[j])


def calculate_angle(
    atoms: AtomCollection,
    i: int,
    j: int,
    k: int,
    degrees: bool = False,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """
    Calculate angle i-j-k (angle at atom j) by index.

    Args:
        atoms: Molecule or sequence of Atom
        i, j, k: Atom indices (angle vertex at j)
        degrees: If True, return angle in degrees; otherwise radians

    Returns:
        Angle in degrees or radians
    """
    try:
        angle = bond_angle(atoms[i], atoms[j], atoms[k], tol=tol)
    except DegenerateGeometry as e:
        raise DegenerateGeometry(str(e), indices=(i, j, k)) from e
    return float(np.degrees(angle)) if degrees else angle


def calculate_out_of_plane(
    atoms: AtomCollection,
    i: int,
    j: int,
    k: int,
    l: int,
    degrees: bool = False,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """
    Calculate the out-of-plane angle of atom i from the j-k-l plane by index.

    Returns the angle (arcsin of the normalised triple product), in degrees
    or radians.
    """
    try:
        angle = out_of_plane_angle(atoms[i], atoms[j], atoms[k], atoms[l], tol=tol)
    except DegenerateGeometry as e:
        raise DegenerateGeometry(str(e), indices=(i, j, k, l)) from e
    return float(np.degrees(angle)) if degrees else angle


def calculate_dihedral(
    atoms: AtomCollection,
    i: int,
    j: int,
    k: int,
    l: int,
    degrees: bool = False,
    tol: float = DEFAULT_TOLERANCE
) -> float:
    """Calculate dihedral angle i-j-k-l by index, in degrees or radians."""
    try:
        angle = dihedral_angle(atoms[i], atoms[j], atoms[k], atoms[l], tol=tol)
    except DegenerateGeometry as e:
        raise DegenerateGeometry(str(e), indices=(i, j, k, l)) from e
    return float(np.degrees(angle)) if degrees else angle
