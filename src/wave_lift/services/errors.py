"""Service layer errors."""


class NotFoundError(LookupError):
    """A referenced record does not exist."""


class ConfirmationError(ValueError):
    """A confirmation token is unknown, expired or already used."""
