"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
Both the API layer (higher) and the persistence/rules layers (lower) send to/receive from the Service using the models defined here
(decouples the SQLAlchemy rows and the pydantic request/response models from the information needed to cross a boundary)
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class GameModel:
    """Transport-safe representation of a stored game."""

    game_id: UUID
    initial_fen: str
    current_fen: str


@dataclass
class MoveModel:
    """One entry of a game's move ledger."""

    game_id: UUID
    move_number: int
    san: str
    uci: Optional[str]
    fen_before: str
    fen_after: str
