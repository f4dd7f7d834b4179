"""
molgeom - Internal Molecular Geometry from Cartesian Coordinates

Derives Z-matrix-style internal coordinates from atom positions: the
pairwise bond-length matrix, every distinct three-atom bond angle, and
four-atom out-of-plane and dihedral angles.
"""

__version__ = "0.1.0"
