"""Core infrastructure: configuration, constants, and exceptions."""

from .config import (
    GeometryConfig,
    ReportConfig,
    AnalysisConfig,
)
from .constants import (
    UNINITIALIZED_TAG,
    DEFAULT_TOLERANCE,
    ELEMENT_SYMBOLS,
    ATOMIC_NUMBERS,
)
from .exceptions import (
    MolGeomError,
    ConfigurationError,
    FileIOError,
    RecordParseError,
    RecordCountMismatch,
    InsufficientAtoms,
    DegenerateGeometry,
)

__all__ = [
    "GeometryConfig",
    "ReportConfig",
    "AnalysisConfig",
    "UNINITIALIZED_TAG",
    "DEFAULT_TOLERANCE",
    "ELEMENT_SYMBOLS",
    "ATOMIC_NUMBERS",
    "MolGeomError",
    "ConfigurationError",
    "FileIOError",
    "RecordParseError",
    "RecordCountMismatch",
    "InsufficientAtoms",
    "DegenerateGeometry",
]
