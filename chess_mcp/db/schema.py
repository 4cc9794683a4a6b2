"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    initial_fen: Mapped[str]
    current_fen: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBMove(Base):
    __tablename__ = "moves"
    __table_args__ = (
        UniqueConstraint("game_id", "move_number", name="uq_moves_game_move_number"),
    )
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"), index=True)
    move_number: Mapped[int]
    move_san: Mapped[str]
    move_uci: Mapped[Optional[str]]
    fen_before: Mapped[str]
    fen_after: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
