from __future__ import annotations

class BloatBusterError(Exception):
    """Base class for all bloatbuster errors."""

class DatabaseError(BloatBusterError):
    """Reference database file could not be read or parsed."""

class DetectionError(BloatBusterError):
    """User-visible, recoverable detection failure."""

class BlankInputError(DetectionError):
    def __init__(self, msg: str = "Please paste your package list"):
        super().__init__(msg)

class NoPackagesFoundError(DetectionError):
    def __init__(self, msg: str = "No valid packages found in the input"):
        super().__init__(msg)

class DetectionFailedError(DetectionError):
    def __init__(self, cause: BaseException):
        super().__init__(f"An error occurred whilst processing: {cause}")
        self.cause = cause
