"""Exception types raised while extracting and normalizing run outputs."""

from __future__ import annotations


class SisterCladeError(Exception):
    """Base class for every failure that aborts a batch."""


class ConfigError(SisterCladeError, ValueError):
    pass


class FilenamePatternError(SisterCladeError, ValueError):
    pass


class StructuralValidationError(SisterCladeError, ValueError):
    """A posterior-predictive report does not have the expected layout."""

    def __init__(self, path: str, line_number: int, expected: str, found: str | None):
        self.path = path
        self.line_number = line_number
        self.expected = expected
        self.found = found
        shown = "<missing>" if found is None else repr(found)
        super().__init__(
            f"{path}: line {line_number} expected {expected!r}, found {shown}"
        )

    def __reduce__(self):
        return (type(self), (self.path, self.line_number, self.expected, self.found))


class NumericParseError(SisterCladeError, ValueError):
    pass


class InsufficientSamplesError(SisterCladeError, ValueError):
    pass


class MissingReferenceError(SisterCladeError, LookupError):
    pass


class CategoryError(SisterCladeError, ValueError):
    pass
