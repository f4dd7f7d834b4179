"""Pytest fixtures for molgeom tests."""

import pytest
import numpy as np
from molgeom.molecule.structure import Molecule, Atom


@pytest.fixture
def water_molecule():
    """Simple water molecule, O first."""
    atoms = [
        Atom(tag=8, x=0.0, y=0.0, z=0.0),
        Atom(tag=1, x=0.96, y=0.0, z=0.0),
        Atom(tag=1, x=-0.24, y=0.93, z=0.0),
    ]
    return Molecule(atoms=atoms, name="H2O")


@pytest.fixture
def colinear_atoms():
    """Three atoms on the x axis; the middle index sits in the middle."""
    return [
        Atom(tag=6, x=0.0, y=0.0, z=0.0),
        Atom(tag=6, x=1.0, y=0.0, z=0.0),
        Atom(tag=6, x=2.0, y=0.0, z=0.0),
    ]


@pytest.fixture
def right_angle_atoms():
    """Index 1 is the vertex of a right angle."""
    return [
        Atom(tag=1, x=1.0, y=0.0, z=0.0),
        Atom(tag=8, x=0.0, y=0.0, z=0.0),
        Atom(tag=1, x=0.0, y=1.0, z=0.0),
    ]


@pytest.fixture
def planar_molecule():
    """Four atoms in the z = 0 plane (formaldehyde-like)."""
    atoms = [
        Atom(tag=8, x=0.0, y=1.2, z=0.0),
        Atom(tag=1, x=0.94, y=-0.59, z=0.0),
        Atom(tag=6, x=0.0, y=0.0, z=0.0),
        Atom(tag=1, x=-0.94, y=-0.59, z=0.0),
    ]
    return Molecule(atoms=atoms, name="CH2O")


@pytest.fixture
def methane_molecule():
    """Tetrahedral methane, C first."""
    h = 1.09 / np.sqrt(3.0)
    coords = np.array([
        [0.0, 0.0, 0.0],
        [h, h, h],
        [-h, -h, h],
        [-h, h, -h],
        [h, -h, -h],
    ])
    return Molecule.from_arrays([6, 1, 1, 1, 1], coords, name="CH4")


@pytest.fixture
def random_molecule():
    """Eight atoms at reproducible random positions."""
    rng = np.random.default_rng(seed=1234)
    coords = rng.uniform(-3.0, 3.0, size=(8, 3))
    tags = [6, 6, 7, 8, 1, 1, 1, 1]
    return Molecule.from_arrays(tags, coords, name="random")


@pytest.fixture
def write_geometry_file(tmp_path):
    """Factory writing raw text into a geometry file under tmp_path."""
    def _write(text: str, name: str = "mol.geom"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write
