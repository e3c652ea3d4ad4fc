class TournamentError(Exception):
    """Base class for errors raised by the tournament services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TournamentError):
    """Input was malformed, e.g. a player without a name."""


class InvalidStateError(TournamentError):
    """Stored tournament state does not allow the requested operation."""


class NotFoundError(TournamentError):
    """A referenced player or match does not exist."""


class StorageError(TournamentError):
    """The backing store failed; the transaction has been rolled back."""
