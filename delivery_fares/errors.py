"""Exceptions raised by the fare processor's I/O layer."""


class FareProcessingError(Exception):
    """Base class for fare processor failures surfaced to the caller."""

    pass


class InputFileError(FareProcessingError):
    """Raised when the ping input cannot be opened or read."""

    pass


class OutputWriteError(FareProcessingError):
    """Raised when the fare output cannot be written."""

    pass
