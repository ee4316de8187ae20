"""Exceptions raised by the gomodclean engine."""


class CleanerError(Exception):
    """Base class for every failure surfaced to the CLI."""


class ScanError(CleanerError):
    """The module cache could not be traversed."""


class ModfileError(CleanerError):
    """A go.mod file could not be found, read or parsed."""


class InvalidCoordinateError(CleanerError, ValueError):
    """A string is not a valid ``path@version`` module coordinate."""


class SizeCalculationError(CleanerError):
    """One or more entries could not be sized. No total is reported."""

    def __init__(self, errors: list[Exception]):
        self.errors = errors
        details = "; ".join(str(e) for e in errors)
        super().__init__(f"failed to size {len(errors)} module(s): {details}")


class RemovalError(CleanerError):
    """Deleting a cache entry failed; later entries were not attempted."""
