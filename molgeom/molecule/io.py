"""File I/O for molecular geometries (native tag format and XYZ)."""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .structure import Molecule, Atom
from ..core.constants import tag_for_symbol
from ..core.exceptions import FileIOError, RecordParseError, RecordCountMismatch

logger = logging.getLogger(__name__)


def parse_geometry(lines: Iterable[str], name: str = "",
                   filepath: str = None) -> Molecule:
    """
    Build a molecule from lines of the native geometry format.

    Format:
        N                    (number of atoms)
        tag x y z
        tag x y z
        ...                  (N records)

    Blank lines are ignored. Fields past the fourth on a record are ignored.

    Args:
        lines: Raw text lines
        name: Name given to the molecule
        filepath: Source path, only used in error messages

    Returns:
        Molecule object

    Raises:
        RecordParseError: If the header or a record is malformed
        RecordCountMismatch: If the number of records differs from N
    """
    numbered = _non_blank(lines)
    if not numbered:
        raise RecordParseError("Geometry input is empty", filepath=filepath)

    header_line, header = numbered[0]
    try:
        n_atoms = int(header)
    except ValueError:
        raise RecordParseError(
            f"First line must be number of atoms, got: {header}",
            filepath=filepath, line_number=header_line
        )

    records = numbered[1:]
    if len(records) != n_atoms:
        raise RecordCountMismatch(
            f"Number of atoms ({n_atoms}) != number of data points ({len(records)})",
            filepath=filepath, declared=n_atoms, found=len(records)
        )

    atoms = [_parse_record(line, line_number, filepath)
             for line_number, line in records]

    logger.debug(f"Parsed {len(atoms)} atoms for '{name}'")
    return Molecule(atoms=atoms, name=name)


def read_geometry(filepath: Union[str, Path]) -> Molecule:
    """
    Read a molecule from a native geometry file.

    The molecule is named after the file stem.

    Raises:
        FileIOError: If the file cannot be read
        RecordParseError, RecordCountMismatch: See parse_geometry
    """
    filepath = Path(filepath)
    lines = _read_lines(filepath)
    return parse_geometry(lines, name=filepath.stem, filepath=str(filepath))


def write_geometry(mol: Molecule, filepath: Union[str, Path]) -> None:
    """
    Write a molecule in the native geometry format.

    Raises:
        FileIOError: If file cannot be written
    """
    filepath = Path(filepath)

    try:
        with open(filepath, 'w') as f:
            f.write(f"{mol.num_atoms}\n")
            for atom in mol.atoms:
                f.write(f"{atom.tag:d}  {atom.x:15.10f}  {atom.y:15.10f}  {atom.z:15.10f}\n")
    except IOError as e:
        raise FileIOError(f"Cannot write file: {e}", filepath=str(filepath))


def read_xyz(filepath: Union[str, Path]) -> Molecule:
    """
    Read a molecule from an XYZ file.

    XYZ format:
        N                    (number of atoms)
        comment line         (optional title)
        symbol x y z
        ...

    Element symbols become atomic-number tags. The comment line, when not
    empty, is used as the molecule name; otherwise the file stem is.

    Raises:
        FileIOError: If file cannot be read
        RecordParseError: If a line is malformed or a symbol is unknown
        RecordCountMismatch: If the number of records differs from N
    """
    filepath = Path(filepath)
    path_str = str(filepath)
    lines = [line.rstrip("\n") for line in _read_lines(filepath)]

    if not lines or not lines[0].strip():
        raise RecordParseError("XYZ file is empty", filepath=path_str)

    try:
        n_atoms = int(lines[0].strip())
    except ValueError:
        raise RecordParseError(
            f"First line must be number of atoms, got: {lines[0].strip()}",
            filepath=path_str, line_number=1
        )

    comment = lines[1].strip() if len(lines) > 1 else ""
    records = [(number, line) for number, line in enumerate(lines[2:], start=3)
               if line.strip()]

    if len(records) != n_atoms:
        raise RecordCountMismatch(
            f"Expected {n_atoms} atoms but file has {len(records)} coordinate lines",
            filepath=path_str, declared=n_atoms, found=len(records)
        )

    atoms = []
    for line_number, line in records:
        parts = line.split()
        if len(parts) < 4:
            raise RecordParseError(
                f"Invalid coordinate line {line_number}: {line.strip()}",
                filepath=path_str, line_number=line_number
            )
        try:
            tag = tag_for_symbol(parts[0])
        except KeyError:
            raise RecordParseError(
                f"Unknown element symbol '{parts[0]}' on line {line_number}",
                filepath=path_str, line_number=line_number
            )
        x, y, z = _parse_coordinates(parts[1:4], line, line_number, path_str)
        atoms.append(Atom(tag=tag, x=x, y=y, z=z))

    return Molecule(atoms=atoms, name=comment or filepath.stem)


def read_molecule(filepath: Union[str, Path]) -> Molecule:
    """Read a molecule, choosing the format from the file suffix."""
    filepath = Path(filepath)
    if filepath.suffix.lower() == ".xyz":
        return read_xyz(filepath)
    return read_geometry(filepath)


def _read_lines(filepath: Path) -> List[str]:
    """Read all lines of a text file."""
    try:
        with open(filepath, 'r') as f:
            return f.readlines()
    except IOError as e:
        raise FileIOError(f"Cannot read file: {e}", filepath=str(filepath))


def _non_blank(lines: Iterable[str]) -> List[Tuple[int, str]]:
    """Pair each non-blank stripped line with its 1-based line number."""
    return [(number, line.strip()) for number, line in enumerate(lines, start=1)
            if line.strip()]


def _parse_record(line: str, line_number: int, filepath: str = None) -> Atom:
    """Parse one 'tag x y z' record."""
    parts = line.split()
    if len(parts) < 4:
        raise RecordParseError(
            f"Invalid atom record on line {line_number}: {line}",
            filepath=filepath, line_number=line_number
        )

    try:
        tag = int(parts[0])
    except ValueError:
        raise RecordParseError(
            f"Invalid atom tag on line {line_number}: {parts[0]}",
            filepath=filepath, line_number=line_number
        )
    if tag < 0:
        raise RecordParseError(
            f"Atom tag must be non-negative on line {line_number}, got {tag}",
            filepath=filepath, line_number=line_number
        )

    x, y, z = _parse_coordinates(parts[1:4], line, line_number, filepath)
    return Atom(tag=tag, x=x, y=y, z=z)


def _parse_coordinates(fields: List[str], line: str, line_number: int,
                       filepath: str = None) -> Tuple[float, float, float]:
    """Convert three coordinate fields to floats."""
    try:
        x, y, z = (float(value) for value in fields)
    except ValueError:
        raise RecordParseError(
            f"Invalid coordinates on line {line_number}: {line.strip()}",
            filepath=filepath, line_number=line_number
        )
    return x, y, z
