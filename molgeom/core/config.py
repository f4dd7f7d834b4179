"""Dataclass-based configuration for geometry analysis runs."""

from dataclasses import dataclass, field
from typing import Optional, List, Literal, Tuple
from pathlib import Path

from .constants import DEFAULT_TOLERANCE
from .exceptions import ConfigurationError

Quadruple = Tuple[int, int, int, int]

OUTPUT_FORMATS = ("text", "json")
ANGLE_UNITS = ("radians", "degrees")


@dataclass(frozen=True)
class GeometryConfig:
    """
    Immutable settings for the geometry calculations.

    Attributes:
        tolerance: Arm lengths and sin(phi) at or below this are treated as
            zero and reported as degenerate geometry
        compute_bond_lengths: Build the pairwise bond-length matrix
        compute_bond_angles: Enumerate all three-atom bond angles
    """
    tolerance: float = DEFAULT_TOLERANCE
    compute_bond_lengths: bool = True
    compute_bond_angles: bool = True

    def __post_init__(self):
        if self.tolerance < 0:
            raise ConfigurationError(
                f"tolerance must be non-negative, got {self.tolerance}"
            )


@dataclass
class ReportConfig:
    """
    Configuration for report output.

    Attributes:
        output_format: "text" (human-readable) or "json"
        angle_units: "radians" or "degrees" for reported angles
        precision: Number of decimals printed for lengths and angles
    """
    output_format: Literal["text", "json"] = "text"
    angle_units: Literal["radians", "degrees"] = "radians"
    precision: int = 6

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unknown output format '{self.output_format}', "
                f"expected one of {OUTPUT_FORMATS}"
            )
        if self.angle_units not in ANGLE_UNITS:
            raise ConfigurationError(
                f"Unknown angle units '{self.angle_units}', "
                f"expected one of {ANGLE_UNITS}"
            )
        if self.precision < 0:
            raise ConfigurationError(
                f"precision must be non-negative, got {self.precision}"
            )

    @property
    def degrees(self) -> bool:
        """Whether angles are reported in degrees."""
        return self.angle_units == "degrees"


@dataclass
class AnalysisConfig:
    """
    Master configuration combining all sub-configurations.

    Attributes:
        geometry: Geometry calculation settings
        report: Report output settings
        out_of_plane: Atom quadruples (i, j, k, l) for out-of-plane values
        dihedrals: Atom quadruples (i, j, k, l) for torsion angles
        output_dir: Directory for report and plot files (stdout if None)
        plot: Whether to save plots of the derived data
    """
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    out_of_plane: List[Quadruple] = field(default_factory=list)
    dihedrals: List[Quadruple] = field(default_factory=list)
    output_dir: Optional[Path] = None
    plot: bool = False

    def __post_init__(self):
        """Normalize quadruples to tuples and output_dir to a Path."""
        self.out_of_plane = [_as_quadruple(q) for q in self.out_of_plane]
        self.dihedrals = [_as_quadruple(q) for q in self.dihedrals]
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)


def _as_quadruple(indices) -> Quadruple:
    """Validate a sequence of four atom indices."""
    try:
        quad = tuple(indices)
    except TypeError:
        raise ConfigurationError(f"Expected 4 atom indices, got {indices!r}")
    if len(quad) != 4 or not all(isinstance(i, int) for i in quad):
        raise ConfigurationError(f"Expected 4 integer atom indices, got {indices!r}")
    if any(i < 0 for i in quad):
        raise ConfigurationError(f"Atom indices must be non-negative, got {indices!r}")
    return quad
