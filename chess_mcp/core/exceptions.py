"""Custom exceptions raised by the service, rules and persistence layers."""

from chess_mcp.core.shared_types import ErrorKind


class GameError(Exception):
    """Top-level exception. Every subclass declares the kind of failure it represents."""

    kind: ErrorKind = ErrorKind.INTERNAL


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""

    kind = ErrorKind.INVALID_INPUT


class GameNotFoundError(GameError):
    kind = ErrorKind.GAME_NOT_FOUND

    def __init__(self, message: str = "game_not_found") -> None:
        super().__init__(message)


class IllegalMoveError(GameError):
    kind = ErrorKind.ILLEGAL_MOVE

    def __init__(self, message: str = "illegal_move") -> None:
        super().__init__(message)


class ConflictError(GameError):
    """The game moved on between reading its position and writing the next move."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "conflict") -> None:
        super().__init__(message)


class InvalidPositionError(GameError):
    """Stored FEN string could not be loaded by the rules engine."""

    kind = ErrorKind.INVALID_POSITION


class RepositoryError(GameError):
    kind = ErrorKind.INTERNAL
