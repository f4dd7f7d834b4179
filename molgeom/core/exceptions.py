"""Custom exception hierarchy for molgeom."""


class MolGeomError(Exception):
    """Base exception for all molgeom errors."""
    pass


class ConfigurationError(MolGeomError):
    """Raised when configuration is invalid or inconsistent."""
    pass


class FileIOError(MolGeomError):
    """Raised when file reading or writing fails."""

    def __init__(self, message: str, filepath: str = None):
        super().__init__(message)
        self.filepath = filepath


class RecordParseError(FileIOError):
    """Raised when a header or atom record cannot be parsed."""

    def __init__(self, message: str, filepath: str = None,
                 line_number: int = None):
        super().__init__(message, filepath=filepath)
        self.line_number = line_number


class RecordCountMismatch(FileIOError):
    """Raised when the declared atom count disagrees with the records supplied."""

    def __init__(self, message: str, filepath: str = None,
                 declared: int = None, found: int = None):
        super().__init__(message, filepath=filepath)
        self.declared = declared
        self.found = found


class InsufficientAtoms(MolGeomError):
    """Raised when a computation needs more atoms than were given."""

    def __init__(self, message: str, required: int = None, found: int = None):
        super().__init__(message)
        self.required = required
        self.found = found


class DegenerateGeometry(MolGeomError):
    """Raised when coincident or colinear atoms leave an angle undefined."""

    def __init__(self, message: str, indices: tuple = None):
        super().__init__(message)
        self.indices = indices
