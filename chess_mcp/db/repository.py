"""Protocol repositories (SQLAlchemy implementation in sql_repository.py, dictionary-backed one in the tests)"""

from typing import Optional, Protocol
from uuid import UUID

from chess_mcp.core.models import GameModel, MoveModel


class GameRepository(Protocol):
    """Game Store: game ID -> initial and current position."""

    def create_game(self, initial_fen: str) -> GameModel:
        """Store a new game with current_fen == initial_fen and return it with its newly created ID."""
        ...

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def update_position(
        self, game_id: UUID, new_fen: str, expected_fen: Optional[str] = None
    ) -> bool:
        """Overwrite current_fen. With expected_fen, only if the stored value still matches. Returns whether a row changed."""
        ...


class MoveLedger(Protocol):
    """Append-only move history per game."""

    def count_moves(self, game_id: UUID) -> int:
        """Number of moves recorded so far for the game."""
        ...

    def append_move(self, move: MoveModel) -> MoveModel:
        """Insert one immutable ledger entry."""
        ...

    def list_moves(self, game_id: UUID) -> list[MoveModel]:
        """All ledger entries of the game, ordered by move number."""
        ...


class ChessRepository(GameRepository, MoveLedger, Protocol):
    """Persistence layer orchestration used by the ChessService."""

    def record_move(self, move: MoveModel) -> MoveModel:
        """
        Advance the game's current_fen from move.fen_before to move.fen_after and append the ledger entry, in one transaction.
        Raises ConflictError (and writes nothing) if the game no longer sits at move.fen_before.
        """
        ...
