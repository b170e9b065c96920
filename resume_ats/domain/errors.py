"""Domain exceptions surfaced to API callers."""

from __future__ import annotations


class InputValidationError(ValueError):
    """Caller input is unusable; reported as a 4xx and never retried."""


class FileTooLargeError(InputValidationError):
    pass


class UnsupportedFileTypeError(InputValidationError):
    pass


class FileParseError(Exception):
    """Extraction failed for a file that passed the size and type checks."""


class ResumeEditError(InputValidationError):
    """An edit does not apply to the document (bad index, unknown field)."""


class UnsupportedCharactersError(InputValidationError):
    """The document holds characters the PDF fonts have no glyphs for."""
