"""
Type definitions used across layers
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_INPUT = "invalid_input"
    GAME_NOT_FOUND = "game_not_found"
    ILLEGAL_MOVE = "illegal_move"
    CONFLICT = "conflict"
    INVALID_POSITION = "invalid_position"
    INTERNAL = "internal"
