"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the domain layer (below) and the repository / API layers use the model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PlayerName = str
LayoutNotation = str


@dataclass
class GameModel:
    """Transport-safe representation of an Ironclad game used between Service, repository, and Game layers."""

    starting_layout: LayoutNotation
    current_layout: LayoutNotation
    intents: list[str]
    status: str
    winner: Optional[PlayerName] = None
