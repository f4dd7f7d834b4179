"""Per-molecule geometry analysis runner."""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List, Iterable, Union

import numpy as np

from ..core.config import AnalysisConfig, Quadruple
from ..core.exceptions import MolGeomError
from ..molecule.structure import Molecule
from ..molecule.geometry import calculate_dihedral, out_of_plane
from ..molecule.internal import BondAngle, bond_length_matrix, bond_angles
from ..molecule.io import read_molecule

logger = logging.getLogger(__name__)

# Step names used as keys in GeometryResult.errors
STEP_READ = "read"
STEP_BOND_LENGTHS = "bond_lengths"
STEP_BOND_ANGLES = "bond_angles"


@dataclass
class GeometryResult:
    """
    Everything derived from one molecule.

    Attributes:
        name: Molecule name (file stem when read from disk)
        molecule: Input molecule, None if it could not be read
        bond_lengths: Pairwise distance matrix, None if not computed
        bond_angles: Enumerated bond angles (radians), None if not computed
        out_of_plane: Requested quadruple -> sine of the out-of-plane angle
        dihedrals: Requested quadruple -> dihedral angle in radians
        errors: Step name -> error message for every failed step
        source: Path the molecule was read from, if any
    """
    name: str
    molecule: Optional[Molecule] = None
    bond_lengths: Optional[np.ndarray] = None
    bond_angles: Optional[List[BondAngle]] = None
    out_of_plane: Dict[Quadruple, float] = field(default_factory=dict)
    dihedrals: Dict[Quadruple, float] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    source: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        """True when no step recorded an error."""
        return not self.errors

    @property
    def file_stem(self) -> str:
        """Source file stem, or the sanitised name, for naming output files."""
        stem = Path(self.source).stem if self.source else self.name
        return re.sub(r"[^\w.-]+", "_", stem).strip("._") or "molecule"

    def to_dict(self, degrees: bool = False) -> Dict[str, Any]:
        """
        JSON-serialisable representation.

        Args:
            degrees: Report bond angles and dihedrals in degrees
        """
        convert = np.degrees if degrees else (lambda a: a)

        data: Dict[str, Any] = {
            "name": self.name,
            "source": str(self.source) if self.source else None,
            "angle_units": "degrees" if degrees else "radians",
            "atoms": None,
            "bond_lengths": None,
            "bond_angles": None,
            "out_of_plane": [
                {"atoms": list(quad), "sin": value,
                 "angle": float(convert(np.arcsin(np.clip(value, -1.0, 1.0))))}
                for quad, value in self.out_of_plane.items()
            ],
            "dihedrals": [
                {"atoms": list(quad), "angle": float(convert(value))}
                for quad, value in self.dihedrals.items()
            ],
            "errors": dict(self.errors),
        }
        if self.molecule is not None:
            data["atoms"] = [
                {"tag": atom.tag, "x": atom.x, "y": atom.y, "z": atom.z}
                for atom in self.molecule.atoms
            ]
        if self.bond_lengths is not None:
            data["bond_lengths"] = self.bond_lengths.tolist()
        if self.bond_angles is not None:
            data["bond_angles"] = [
                {"k": rec.k, "j": rec.j, "i": rec.i,
                 "angle": float(convert(rec.angle))}
                for rec in self.bond_angles
            ]
        return data

    def save(self, filepath: Union[str, Path], degrees: bool = False) -> None:
        """Save result to JSON file."""
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(degrees=degrees), f, indent=2)
        logger.info(f"Saved geometry result to {filepath}")


class GeometryAnalysis:
    """
    Derives internal coordinates for molecules.

    Each derived quantity is an independent step: a failure in one
    (too few atoms, degenerate geometry, bad index) is recorded on the
    result and the remaining steps still run.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize analysis.

        Args:
            config: Analysis configuration (default if None)
        """
        self.config = config or AnalysisConfig()

    def analyze(self, molecule: Molecule,
                source: Optional[Path] = None) -> GeometryResult:
        """
        Compute all configured quantities for one molecule.

        Args:
            molecule: Input molecular structure
            source: Path the molecule came from, stored on the result

        Returns:
            GeometryResult with values and any per-step errors
        """
        geometry = self.config.geometry
        tol = geometry.tolerance
        result = GeometryResult(name=molecule.name, molecule=molecule, source=source)

        logger.info(f"Analyzing '{molecule.name}' ({molecule.num_atoms} atoms)")

        if geometry.compute_bond_lengths:
            result.bond_lengths = self._run_step(
                result, STEP_BOND_LENGTHS, bond_length_matrix, molecule
            )

        if geometry.compute_bond_angles:
            result.bond_angles = self._run_step(
                result, STEP_BOND_ANGLES, bond_angles, molecule, tol=tol
            )

        for quad in self.config.out_of_plane:
            step = _step_name("out_of_plane", quad)
            value = self._run_step(result, step, _out_of_plane_by_index,
                                   molecule, quad, tol)
            if step not in result.errors:
                result.out_of_plane[quad] = value

        for quad in self.config.dihedrals:
            step = _step_name("dihedral", quad)
            value = self._run_step(result, step, calculate_dihedral,
                                   molecule, *quad, tol=tol)
            if step not in result.errors:
                result.dihedrals[quad] = value

        if result.succeeded:
            logger.info(f"Finished '{molecule.name}'")
        return result

    def analyze_file(self, filepath: Union[str, Path]) -> GeometryResult:
        """
        Read one file and analyze it.

        A read failure is fatal to this file only; it is returned as a
        result with no molecule and an error under "read".
        """
        filepath = Path(filepath)
        try:
            molecule = read_molecule(filepath)
        except MolGeomError as e:
            logger.warning(f"Could not read {filepath}: {e}")
            return GeometryResult(name=filepath.stem, source=filepath,
                                  errors={STEP_READ: str(e)})
        return self.analyze(molecule, source=filepath)

    def analyze_files(self, filepaths: Iterable[Union[str, Path]]) -> List[GeometryResult]:
        """Analyze each file independently, in order."""
        results = [self.analyze_file(path) for path in filepaths]
        n_failed = sum(1 for r in results if not r.succeeded)
        logger.info(f"Processed {len(results)} file(s), {n_failed} with errors")
        return results

    def _run_step(self, result: GeometryResult, step: str, func, *args, **kwargs):
        """Run one step, recording a failure on the result instead of raising."""
        try:
            return func(*args, **kwargs)
        except (MolGeomError, IndexError) as e:
            logger.warning(f"{result.name}: {step} failed: {e}")
            result.errors[step] = str(e)
            return None


def _step_name(kind: str, quad: Quadruple) -> str:
    return f"{kind}({','.join(str(i) for i in quad)})"


def _out_of_plane_by_index(molecule: Molecule, quad: Quadruple, tol: float) -> float:
    i, j, k, l = quad
    return out_of_plane(molecule[i], molecule[j], molecule[k], molecule[l], tol=tol)
