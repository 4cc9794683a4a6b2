"""
Adapter around the python-chess rules engine.

The service layer never touches `chess.Board` directly: it asks this module to load a position,
apply a move or describe the legal moves, and gets plain dataclasses back.
A fresh board is built from the stored FEN for every request, so no engine state is shared.
"""

from dataclasses import dataclass
from typing import Optional

import chess

from chess_mcp.core.exceptions import IllegalMoveError, InvalidPositionError

STARTING_FEN = chess.STARTING_FEN


@dataclass(frozen=True)
class AppliedMove:
    """Result of a move accepted by the rules engine."""

    san: str
    uci: str
    fen_after: str


@dataclass(frozen=True)
class MoveDescriptor:
    """Verbose description of a single legal move."""

    color: str
    from_square: str
    to_square: str
    piece: str
    san: str
    lan: str
    flags: str
    before: str
    after: str
    captured: Optional[str] = None
    promotion: Optional[str] = None


def load_board(fen: str) -> chess.Board:
    """Construct a board from a FEN string."""
    try:
        return chess.Board(fen)
    except ValueError as exc:
        raise InvalidPositionError(f"Invalid FEN {fen!r}: {exc}") from exc


def parse_move(board: chess.Board, move_text: str) -> chess.Move:
    """
    Interpret a move string leniently.
    ----
    SAN first (python-chess also accepts 'e2e4', 'e2-e4', '0-0', 'e8Q' ... here), then plain UCI.
    Null moves are never accepted.
    """
    candidate = move_text.strip()
    try:
        move = board.parse_san(candidate)
    except ValueError:
        try:
            move = board.parse_uci(candidate.lower())
        except ValueError as exc:
            raise IllegalMoveError() from exc

    if not move:
        raise IllegalMoveError()
    return move


def apply_move(board: chess.Board, move_text: str) -> AppliedMove:
    """Validate and play the move on the board. The board is left in the position after the move."""
    move = parse_move(board, move_text)
    san = board.san(move)
    board.push(move)
    return AppliedMove(san=san, uci=move.uci(), fen_after=board.fen())


def describe_legal_moves(board: chess.Board) -> list[MoveDescriptor]:
    """All legal moves in the position, in the engine's generation order. Empty at checkmate/stalemate."""
    return [_describe(board, move) for move in board.legal_moves]


def first_legal_move(board: chess.Board) -> Optional[str]:
    """
    SAN of the first legal move the engine generates, or None.

    NOTE this is what the best_move tool returns: there is no evaluation or search behind it.
    """
    move = next(iter(board.legal_moves), None)
    if move is None:
        return None
    return board.san(move)


# -- Internal helpers --
def _describe(board: chess.Board, move: chess.Move) -> MoveDescriptor:
    piece = board.piece_at(move.from_square)
    if piece is None:
        raise InvalidPositionError(
            f"No piece on {chess.square_name(move.from_square)} in {board.fen()!r}"
        )

    captured = None
    if board.is_en_passant(move):
        captured = chess.piece_symbol(chess.PAWN)
    elif board.is_capture(move):
        captured_piece = board.piece_at(move.to_square)
        if captured_piece is not None:
            captured = chess.piece_symbol(captured_piece.piece_type)

    before = board.fen()
    san = board.san(move)
    flags = _flags(board, move, piece.piece_type)
    board.push(move)
    after = board.fen()
    board.pop()

    return MoveDescriptor(
        color="w" if board.turn == chess.WHITE else "b",
        from_square=chess.square_name(move.from_square),
        to_square=chess.square_name(move.to_square),
        piece=chess.piece_symbol(piece.piece_type),
        san=san,
        lan=move.uci(),
        flags=flags,
        before=before,
        after=after,
        captured=captured,
        promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
    )


def _flags(board: chess.Board, move: chess.Move, piece_type: chess.PieceType) -> str:
    """Single-letter move flags: n normal, b double pawn push, e en passant, c capture, p promotion, k/q castling."""
    flags = ""
    if board.is_en_passant(move):
        flags += "e"
    elif board.is_capture(move):
        flags += "c"
    if move.promotion:
        flags += "p"
    if board.is_kingside_castling(move):
        flags += "k"
    elif board.is_queenside_castling(move):
        flags += "q"
    if (
        piece_type == chess.PAWN
        and abs(chess.square_rank(move.to_square) - chess.square_rank(move.from_square))
        == 2
    ):
        flags += "b"
    return flags or "n"
