"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    ELIMINATION = "elimination"
    GOAL = "goal"
    FORFEIT = "forfeit"
    STALEMATE = "stalemate"
    ABANDONED = "abandoned"


class Player(StrEnum):
    FIRST = "first"
    SECOND = "second"

    def opponent(self) -> "Player":
        return Player.SECOND if self == Player.FIRST else Player.FIRST


class Action(StrEnum):
    """The closed set of things a player can do on their turn. Values are the keywords typed by the player."""

    PLACE = "place"
    MOVE = "move"
    ATTACK = "attack"


class RejectionReason(StrEnum):
    MALFORMED_INTENT = "malformed intent"
    OUT_OF_BOUNDS = "out of bounds"
    NOT_OWNER = "not owner"
    ILLEGAL_ACTION = "illegal action"
    NO_LEGAL_MOVES = "no legal moves"


class NoMovesPolicy(StrEnum):
    """What happens to a player that has no legal intent on their turn."""

    FORFEIT = "forfeit"
    PASS = "pass"
