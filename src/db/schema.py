"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBPlayer(Base):
    __tablename__ = "players"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    name: Mapped[str]


class DBGameSet(Base):
    __tablename__ = "game_sets"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    name: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    creator_id: Mapped[UUID]
    # UUIDs stored as strings, in insertion order
    admin_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    player_ids: Mapped[list[str]] = mapped_column(JSON, default=list)


class DBScoreEntry(Base):
    __tablename__ = "score_entries"
    __table_args__ = (
        UniqueConstraint("game_set_id", "player_id", "round_number"),
    )
    id: Mapped[UUID] = mapped_column(primary_key=True)
    game_set_id: Mapped[UUID] = mapped_column(
        ForeignKey("game_sets.id", ondelete="CASCADE"), index=True
    )
    player_id: Mapped[UUID] = mapped_column(ForeignKey("players.id"))
    round_number: Mapped[int]
    score: Mapped[int]
    creator_id: Mapped[UUID]
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)


class DBUser(Base):
    """Read-only mirror of the identity provider's users."""

    __tablename__ = "users"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(unique=True)
    display_name: Mapped[str | None]
