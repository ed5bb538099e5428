"""Errors raised by the map generation core."""


class InvalidInputError(ValueError):
    """Raised when a core operation receives input that breaks its contract.

    Every failure in the core is a caller error (an index outside the
    grid, a region map of the wrong length, a region id out of range).
    There is nothing to retry, so the message names the broken invariant.
    """
