"""Unit tests for chess_mcp/rules/position.py"""

import chess
import pytest

from chess_mcp.core.exceptions import IllegalMoveError, InvalidPositionError
from chess_mcp.rules.position import (
    STARTING_FEN,
    _describe,
    apply_move,
    describe_legal_moves,
    first_legal_move,
    load_board,
    parse_move,
)

EN_PASSANT_FEN = "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3"
CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
TWO_ROOKS_FEN = "4k3/8/8/8/8/8/4K3/R6R w - - 0 1"
PROMOTION_CAPTURE_FEN = "1n5k/P7/8/8/8/8/8/K7 w - - 0 1"


def test_load_board() -> None:
    assert load_board(STARTING_FEN).fen() == STARTING_FEN


@pytest.mark.parametrize("fen", ["", "garbage", "8/8/8 w - - 0 1"])
def test_load_invalid_board(fen: str) -> None:
    with pytest.raises(InvalidPositionError):
        _ = load_board(fen)


def test_apply_move() -> None:
    board = load_board(STARTING_FEN)
    applied = apply_move(board, "Nf3")

    assert applied.san == "Nf3"
    assert applied.uci == "g1f3"
    assert applied.fen_after == board.fen()
    assert board.turn == chess.BLACK


def test_rejected_move_leaves_board_untouched() -> None:
    board = load_board(STARTING_FEN)
    with pytest.raises(IllegalMoveError):
        _ = apply_move(board, "Nf6")
    assert board.fen() == STARTING_FEN


@pytest.mark.parametrize("move_text", ["O-O", "0-0", "e1g1"])
def test_castling_notations(move_text: str) -> None:
    board = load_board(CASTLING_FEN)
    assert parse_move(board, move_text) == chess.Move.from_uci("e1g1")


def test_ambiguous_move_is_illegal() -> None:
    """Both rooks can reach d1."""
    board = load_board(TWO_ROOKS_FEN)
    with pytest.raises(IllegalMoveError):
        _ = parse_move(board, "Rd1")
    assert parse_move(board, "Rad1") == chess.Move.from_uci("a1d1")


def test_describe_en_passant() -> None:
    board = load_board(EN_PASSANT_FEN)
    capture = next(
        move for move in describe_legal_moves(board) if move.lan == "e5f6"
    )
    assert capture.flags == "e"
    assert capture.captured == "p"
    assert capture.san == "exf6"


def test_describe_castling() -> None:
    moves = {move.lan: move for move in describe_legal_moves(load_board(CASTLING_FEN))}
    assert moves["e1g1"].flags == "k"
    assert moves["e1g1"].san == "O-O"
    assert moves["e1c1"].flags == "q"
    assert moves["a1a8"].flags == "c"
    assert moves["a1a8"].captured == "r"


def test_describe_promotion_capture() -> None:
    moves = describe_legal_moves(load_board(PROMOTION_CAPTURE_FEN))
    capture_to_queen = next(move for move in moves if move.lan == "a7b8q")
    assert capture_to_queen.flags == "cp"
    assert capture_to_queen.captured == "n"
    assert capture_to_queen.promotion == "q"
    assert {move.promotion for move in moves if move.to_square == "a8"} == {"q", "r", "b", "n"}


def test_describe_does_not_change_board() -> None:
    board = load_board(STARTING_FEN)
    described = describe_legal_moves(board)
    assert len(described) == 20
    assert board.fen() == STARTING_FEN
    assert all(move.before == STARTING_FEN for move in described)


def test_first_legal_move() -> None:
    board = load_board(STARTING_FEN)
    assert first_legal_move(board) == board.san(list(board.legal_moves)[0])
    assert first_legal_move(load_board("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1")) is None


def test_describe_move_from_empty_square() -> None:
    """A move that does not start on a piece cannot be described."""
    with pytest.raises(InvalidPositionError):
        _ = _describe(load_board(STARTING_FEN), chess.Move.from_uci("e4e5"))
