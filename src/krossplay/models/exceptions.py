"""Exception hierarchy for puzzle loading and grid construction."""


class KrossWordError(ValueError):
    """Base class for every error raised by krossplay."""


class PuzzleFormatError(KrossWordError):
    """Raised when a puzzle definition cannot be read or is structurally invalid."""


class ClueDefinitionError(PuzzleFormatError):
    """Raised when a single clue is malformed (length, letters, solutions)."""


class ClueBoundsError(PuzzleFormatError):
    """Raised when a clue's span leaves the grid."""


class ClueConflictError(PuzzleFormatError):
    """Raised when clues sharing a cell cannot agree on its letter."""


class PuzzleNotFoundError(KrossWordError, KeyError):
    """Raised when a puzzle id is not registered."""

    def __str__(self) -> str:
        return Exception.__str__(self)
