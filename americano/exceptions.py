"""
Exceptions raised by the tournament engine.
"""


class AmericanoError(Exception):
    """Base exception for all tournament engine errors."""

    pass


class ConfigurationError(AmericanoError, ValueError):
    """Raised when scheduling inputs cannot produce a valid schedule."""

    pass


class TournamentStateError(AmericanoError):
    """Raised when a tournament state transition is not allowed."""

    pass


class IngestError(AmericanoError):
    """Raised when a roster or results sheet cannot be read."""

    pass
