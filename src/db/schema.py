"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, LargeBinary
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.shared_types import Status

__all__ = ["Base", "DBGame", "Status"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    # autoincrement: every new game gets the next integer ID
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    white: Mapped[str]
    black: Mapped[str]
    board: Mapped[bytes] = mapped_column(LargeBinary(64))
    color_to_move: Mapped[str]
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    moves_uci: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
