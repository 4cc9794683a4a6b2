"""HTTP tool routes. Each handler only forwards to the ChessService; error translation happens in api/errors.py."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chess_mcp.api.models import (
    BestMoveResponse,
    BoardResponse,
    HealthResponse,
    LegalMovesResponse,
    MakeMoveRequest,
    ManifestResponse,
    MoveHistoryResponse,
    MoveResponse,
    NewGameRequest,
    NewGameResponse,
    ToolEntry,
)
from chess_mcp.db.database import get_db
from chess_mcp.db.sql_repository import SQLChessRepository
from chess_mcp.services.chess_service import ChessService

SERVER_NAME = "chess-mcp-server"
SERVER_VERSION = "0.1.0"

TOOLS = [
    ToolEntry(name="new_game", method="POST", path="/tools/new_game"),
    ToolEntry(name="get_board", method="GET", path="/tools/get_board/:id"),
    ToolEntry(name="legal_moves", method="GET", path="/tools/legal_moves/:id"),
    ToolEntry(name="make_move", method="POST", path="/tools/make_move"),
    ToolEntry(name="best_move", method="GET", path="/tools/best_move/:id"),
    ToolEntry(name="move_history", method="GET", path="/tools/move_history/:id"),
]

router = APIRouter()


def get_service(db: Session = Depends(get_db)) -> ChessService:
    return ChessService(SQLChessRepository(db))


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()


@router.post("/tools/new_game", response_model=NewGameResponse)
def new_game(
    request: Optional[NewGameRequest] = None,
    service: ChessService = Depends(get_service),
) -> NewGameResponse:
    return service.create_new_game(request or NewGameRequest())


@router.get("/tools/get_board/{game_id}", response_model=BoardResponse)
def get_board(
    game_id: str, service: ChessService = Depends(get_service)
) -> BoardResponse:
    return service.get_board(game_id)


@router.get(
    "/tools/legal_moves/{game_id}",
    response_model=LegalMovesResponse,
    response_model_exclude_none=True,
)
def legal_moves(
    game_id: str, service: ChessService = Depends(get_service)
) -> LegalMovesResponse:
    return service.legal_moves(game_id)


@router.post("/tools/make_move", response_model=MoveResponse)
def make_move(
    request: MakeMoveRequest, service: ChessService = Depends(get_service)
) -> MoveResponse:
    return service.make_move(request)


@router.get("/tools/best_move/{game_id}", response_model=BestMoveResponse)
def best_move(
    game_id: str, service: ChessService = Depends(get_service)
) -> BestMoveResponse:
    return service.best_move(game_id)


@router.get("/tools/move_history/{game_id}", response_model=MoveHistoryResponse)
def move_history(
    game_id: str, service: ChessService = Depends(get_service)
) -> MoveHistoryResponse:
    return service.move_history(game_id)


@router.get("/mcp/manifest", response_model=ManifestResponse)
def manifest() -> ManifestResponse:
    """Static directory of the tools this server exposes."""
    return ManifestResponse(name=SERVER_NAME, version=SERVER_VERSION, tools=TOOLS)
