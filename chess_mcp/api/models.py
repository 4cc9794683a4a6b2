"""Requests and Response models"""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chess_mcp.core.exceptions import InvalidRequestError


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    initial_fen: Optional[str] = None


class MakeMoveRequest(BaseModel):
    id: str
    move: str

    @field_validator("move")
    @classmethod
    def validate_move(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("move must not be empty.")
        return value


# --- RESPONSE MODELS ---
class HealthResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    ok: Literal[False] = False
    error: str


class NewGameResponse(BaseModel):
    ok: bool = True
    game_id: UUID
    fen: str


class BoardResponse(BaseModel):
    ok: bool = True
    game_id: UUID
    fen: str


class LegalMoveDescriptor(BaseModel):
    """Verbose description of one legal move. Serialised with 'from'/'to' keys."""

    model_config = ConfigDict(populate_by_name=True)

    color: str
    from_square: str = Field(alias="from")
    to_square: str = Field(alias="to")
    piece: str
    captured: Optional[str] = None
    promotion: Optional[str] = None
    flags: str
    san: str
    lan: str
    before: str
    after: str


class LegalMovesResponse(BaseModel):
    ok: bool = True
    moves: list[LegalMoveDescriptor]


class MoveResponse(BaseModel):
    ok: bool = True
    fen: str
    move: str


class BestMoveResponse(BaseModel):
    ok: bool = True
    best_move: Optional[str]


class MoveRecord(BaseModel):
    move_number: int
    san: str
    uci: Optional[str]
    fen_before: str
    fen_after: str


class MoveHistoryResponse(BaseModel):
    ok: bool = True
    game_id: UUID
    initial_fen: str
    current_fen: str
    moves: list[MoveRecord]


class ToolEntry(BaseModel):
    name: str
    method: Literal["GET", "POST"]
    path: str


class ManifestResponse(BaseModel):
    name: str
    version: str
    tools: list[ToolEntry]
