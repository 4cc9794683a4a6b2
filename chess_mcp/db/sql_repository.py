"""Implementation of ChessRepository using SQLAlchemy"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar
from uuid import UUID, uuid4

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from chess_mcp.core.exceptions import ConflictError, GameError, RepositoryError
from chess_mcp.core.models import GameModel, MoveModel
from chess_mcp.db.schema import DBGame, DBMove

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLChessRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    # -- Game Store --
    def create_game(self, initial_fen: str) -> GameModel:
        """Store a new game with current_fen == initial_fen and return it with its newly created ID."""
        new_id = uuid4()
        with self._transaction():
            self.db.add(
                DBGame(id=new_id, initial_fen=initial_fen, current_fen=initial_fen)
            )
        return GameModel(game_id=new_id, initial_fen=initial_fen, current_fen=initial_fen)

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._guarded(lambda: self.db.get(DBGame, game_id))
        if game_db:
            return self._to_game_model(game_db)
        return None

    def update_position(
        self, game_id: UUID, new_fen: str, expected_fen: Optional[str] = None
    ) -> bool:
        """Overwrite current_fen. With expected_fen, only if the stored value still matches. Returns whether a row changed."""
        with self._transaction():
            updated = self._set_position(game_id, new_fen, expected_fen)
        return updated

    # -- Move Ledger --
    def count_moves(self, game_id: UUID) -> int:
        """Number of moves recorded so far for the game."""
        query = select(func.count()).select_from(DBMove).where(DBMove.game_id == game_id)
        return self._guarded(lambda: self.db.scalar(query)) or 0

    def append_move(self, move: MoveModel) -> MoveModel:
        """Insert one immutable ledger entry."""
        with self._transaction():
            self.db.add(self._to_db_move(move))
        return move

    def list_moves(self, game_id: UUID) -> list[MoveModel]:
        """All ledger entries of the game, ordered by move number."""
        query = (
            select(DBMove)
            .where(DBMove.game_id == game_id)
            .order_by(DBMove.move_number)
        )
        rows = self._guarded(lambda: self.db.scalars(query).all())
        return [self._to_move_model(row) for row in rows]

    def record_move(self, move: MoveModel) -> MoveModel:
        """
        Advance the game's current_fen from move.fen_before to move.fen_after and append the ledger entry, in one transaction.
        ----
        The position update is a compare-and-swap on current_fen: if another request moved the game first,
        nothing is written and ConflictError is raised. A duplicate (game_id, move_number) is reported the same way.
        """
        with self._transaction():
            if not self._set_position(move.game_id, move.fen_after, move.fen_before):
                raise ConflictError()
            self.db.add(self._to_db_move(move))
        return move

    # -- Internal helpers --
    def _set_position(
        self, game_id: UUID, new_fen: str, expected_fen: Optional[str]
    ) -> bool:
        statement = update(DBGame).where(DBGame.id == game_id)
        if expected_fen is not None:
            statement = statement.where(DBGame.current_fen == expected_fen)
        result = self.db.execute(
            statement.values(current_fen=new_fen),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount > 0

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """
        Commit on success, roll back on any failure.

        IntegrityError (e.g. two ledger entries with the same move number) becomes ConflictError,
        any other SQLAlchemyError becomes RepositoryError. Domain errors raised inside the block pass through after the rollback.
        """
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self._rollback(exc)
            raise ConflictError() from exc
        except SQLAlchemyError as exc:
            self._rollback(exc)
            raise RepositoryError(str(exc)) from exc
        except GameError as exc:
            self._rollback(exc)
            raise

    def _rollback(self, reason: Exception) -> None:
        self.db.rollback()
        logger.warning("Rolled back transaction: %r", reason)

    def _guarded(self, read: Callable[[], T]) -> T:
        """Run a read, converting driver/ORM failures into RepositoryError."""
        try:
            return read()
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc

    def _to_game_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            game_id=game_db.id,
            initial_fen=game_db.initial_fen,
            current_fen=game_db.current_fen,
        )

    def _to_move_model(self, move_db: DBMove) -> MoveModel:
        return MoveModel(
            game_id=move_db.game_id,
            move_number=move_db.move_number,
            san=move_db.move_san,
            uci=move_db.move_uci,
            fen_before=move_db.fen_before,
            fen_after=move_db.fen_after,
        )

    def _to_db_move(self, move: MoveModel) -> DBMove:
        return DBMove(
            game_id=move.game_id,
            move_number=move.move_number,
            move_san=move.san,
            move_uci=move.uci,
            fen_before=move.fen_before,
            fen_after=move.fen_after,
        )

