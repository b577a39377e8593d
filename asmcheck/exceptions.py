"""Custom exceptions for asmcheck."""


class CheckerError(Exception):
    """Base exception for all checker errors."""


class MissingRootError(CheckerError):
    """Raised when no root folder was given on the command line."""


class EnumerationError(CheckerError):
    """Raised when the file search below the root folder fails."""

    def __init__(self, root: str, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"File search failed under '{root}': {reason}")


class InvalidVersionError(CheckerError, ValueError):
    """Raised when a version token is not ``major.minor[.build[.revision]]``."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid assembly version: {text!r}")


class MetadataReadError(CheckerError):
    """Raised when a binary's metadata cannot be read by a reader tier."""
