"""Molecular structure representation with Atom and Molecule dataclasses."""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence
import numpy as np

from ..core.constants import symbol_for_tag


@dataclass(frozen=True)
class Atom:
    """
    Representation of a single atom.

    Attributes:
        tag: Signed integer identifier, normally the atomic number.
            UNINITIALIZED_TAG (-1) marks a record never filled from input.
        x, y, z: Cartesian position
    """
    tag: int
    x: float
    y: float
    z: float

    @classmethod
    def from_position(cls, tag: int, position: Sequence[float]) -> "Atom":
        """Create an atom from a tag and a length-3 position."""
        coords = np.asarray(position, dtype=float)
        if coords.shape != (3,):
            raise ValueError(f"Position must have shape (3,), got {coords.shape}")
        return cls(tag=int(tag), x=float(coords[0]), y=float(coords[1]),
                   z=float(coords[2]))

    @property
    def position(self) -> np.ndarray:
        """Position as a numpy array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=float)

    @property
    def symbol(self) -> str:
        """Element symbol for the tag ("X" if it is not an atomic number)."""
        return symbol_for_tag(self.tag)

    @property
    def is_valid(self) -> bool:
        """True once the atom carries a real (non-negative) tag."""
        return self.tag >= 0

    def distance_to(self, other: "Atom") -> float:
        """Calculate distance to another atom."""
        from .geometry import distance
        return distance(self, other)


@dataclass
class Molecule:
    """
    Ordered collection of atoms; list position is the atom's identity.

    Attributes:
        atoms: List of Atom objects
        name: Optional name/identifier (file stem when read from disk)
    """
    atoms: List[Atom] = field(default_factory=list)
    name: str = ""

    def __len__(self) -> int:
        return len(self.atoms)

    def __iter__(self):
        return iter(self.atoms)

    def __getitem__(self, index: int) -> Atom:
        return self.atoms[index]

    @property
    def num_atoms(self) -> int:
        """Number of atoms in the molecule."""
        return len(self.atoms)

    @property
    def tags(self) -> List[int]:
        """List of atom tags."""
        return [atom.tag for atom in self.atoms]

    @property
    def symbols(self) -> List[str]:
        """List of element symbols."""
        return [atom.symbol for atom in self.atoms]

    @property
    def coordinates(self) -> np.ndarray:
        """Nx3 array of atomic coordinates."""
        if not self.atoms:
            return np.zeros((0, 3))
        return np.array([atom.position for atom in self.atoms])

    @property
    def formula(self) -> str:
        """Simple molecular formula."""
        counts = Counter(self.symbols)
        parts = []
        for element in sorted(counts.keys()):
            count = counts[element]
            if count == 1:
                parts.append(element)
            else:
                parts.append(f"{element}{count}")
        return "".join(parts)

    @classmethod
    def from_arrays(cls, tags: Sequence[int], coordinates: np.ndarray,
                    name: str = "") -> "Molecule":
        """Create a molecule from a sequence of tags and an Nx3 array."""
        if len(tags) != len(coordinates):
            raise ValueError("Number of tags must match number of coordinates")
        atoms = [Atom.from_position(tag, coord)
                 for tag, coord in zip(tags, coordinates)]
        return cls(atoms=atoms, name=name)
