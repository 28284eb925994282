"""
Custom exceptions.

Anything a player can get wrong while typing an intent is NOT an exception: the validator returns a Rejection for that.
These exceptions signal misuse of the engine by the calling layer (or broken input data such as layouts and config).
"""


class IroncladError(Exception):
    """Top-level error: catch this one to handle anything raised by the application."""


# --- DOMAIN ERRORS ---
class BoardError(IroncladError):
    pass


class OutOfBoundsError(BoardError):
    pass


class InvalidDeltaError(BoardError):
    """A resolution delta does not match the board it is applied to. The board is left untouched."""


class InvalidLayoutError(IroncladError):
    pass


class GameStateError(IroncladError):
    pass


# --- BOUNDARY ERRORS ---
class InvalidRequestError(IroncladError):
    pass


class ConfigError(IroncladError):
    pass


class RepositoryError(IroncladError):
    pass
