"""Orchestration of communication from API router to rules engine and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

import chess

from chess_mcp.api.models import (
    BestMoveResponse,
    BoardResponse,
    LegalMoveDescriptor,
    LegalMovesResponse,
    MakeMoveRequest,
    MoveHistoryResponse,
    MoveRecord,
    MoveResponse,
    NewGameRequest,
    NewGameResponse,
)
from chess_mcp.core.exceptions import ConflictError, GameNotFoundError, IllegalMoveError
from chess_mcp.core.models import GameModel, MoveModel
from chess_mcp.db.repository import ChessRepository
from chess_mcp.rules.position import (
    STARTING_FEN,
    apply_move,
    describe_legal_moves,
    first_legal_move,
    load_board,
)

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for the chess tools."""

    def __init__(self, repository: ChessRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: NewGameRequest) -> NewGameResponse:
        """Create a game from the requested FEN, or the standard starting position if none (or an empty one) was given."""
        initial_fen = request.initial_fen or STARTING_FEN
        game = self.repo.create_game(initial_fen)
        logger.info("Created game %s at %r", game.game_id, game.current_fen)
        return NewGameResponse(game_id=game.game_id, fen=game.current_fen)

    def get_board(self, game_id: str) -> BoardResponse:
        game = self._fetch_game(game_id)
        return BoardResponse(game_id=game.game_id, fen=game.current_fen)

    def legal_moves(self, game_id: str) -> LegalMovesResponse:
        """Verbose descriptors of every legal move in the current position (empty at checkmate/stalemate)."""
        _, board = self._load_position(game_id)
        return LegalMovesResponse(
            moves=[
                LegalMoveDescriptor(
                    color=move.color,
                    from_square=move.from_square,
                    to_square=move.to_square,
                    piece=move.piece,
                    captured=move.captured,
                    promotion=move.promotion,
                    flags=move.flags,
                    san=move.san,
                    lan=move.lan,
                    before=move.before,
                    after=move.after,
                )
                for move in describe_legal_moves(board)
            ]
        )

    def make_move(self, request: MakeMoveRequest) -> MoveResponse:
        """
        Apply a move to a stored game.
        ----
        1. Load the game and build a board from its current position
        2. Let the rules engine validate/apply the move (lenient notation). Rejected? Nothing is written.
        3. Next move number = number of recorded moves + 1
        4. Persist new current position + ledger entry in one transaction
        """
        game, board = self._load_position(request.id)

        try:
            applied = apply_move(board, request.move)
        except IllegalMoveError:
            logger.warning("Rejected move %r for game %s", request.move, game.game_id)
            raise

        next_move_number = self.repo.count_moves(game.game_id) + 1
        entry = MoveModel(
            game_id=game.game_id,
            move_number=next_move_number,
            san=applied.san,
            uci=applied.uci,
            fen_before=game.current_fen,
            fen_after=applied.fen_after,
        )

        try:
            self.repo.record_move(entry)
        except ConflictError:
            logger.warning(
                "Game %s changed while applying move %d (%s)",
                game.game_id,
                next_move_number,
                applied.san,
            )
            raise

        logger.info(
            "Game %s: move %d %s -> %r",
            game.game_id,
            next_move_number,
            applied.san,
            applied.fen_after,
        )
        return MoveResponse(fen=applied.fen_after, move=applied.san)

    def best_move(self, game_id: str) -> BestMoveResponse:
        """
        Suggest a move.
        ----
        NOTE naive stub: returns the first legal move the rules engine generates (no evaluation, no search), or None if there is none.
        """
        _, board = self._load_position(game_id)
        return BestMoveResponse(best_move=first_legal_move(board))

    def move_history(self, game_id: str) -> MoveHistoryResponse:
        game = self._fetch_game(game_id)
        moves = self.repo.list_moves(game.game_id)
        return MoveHistoryResponse(
            game_id=game.game_id,
            initial_fen=game.initial_fen,
            current_fen=game.current_fen,
            moves=[
                MoveRecord(
                    move_number=move.move_number,
                    san=move.san,
                    uci=move.uci,
                    fen_before=move.fen_before,
                    fen_after=move.fen_after,
                )
                for move in moves
            ],
        )

    # -- Internal helpers --
    def _fetch_game(self, game_id: str) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails. An ID that is not a UUID cannot match any game."""
        try:
            parsed_id = UUID(game_id)
        except ValueError as exc:
            raise GameNotFoundError() from exc

        game_model = self.repo.get_game(parsed_id)
        if game_model is None:
            raise GameNotFoundError()
        return game_model

    def _load_position(self, game_id: str) -> tuple[GameModel, chess.Board]:
        """Fetch the game and construct a fresh board from its current position."""
        game = self._fetch_game(game_id)
        return game, load_board(game.current_fen)
