"""Exceptions raised by the hand seal packages."""


class HandSealError(Exception):
    """Base exception for hand seal errors."""
    pass


class HandsMissingError(HandSealError):
    """Raised when a two-hand operation is given fewer than both hands."""
    pass


class CatalogueError(HandSealError):
    """Raised when a jutsu catalogue cannot be read or parsed."""
    pass
