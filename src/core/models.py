"""
Boundary layer data model(s).

These objects can be used to communicate with the Services.
Both the API layer (higher) and the scoring/db layers (lower) send and receive these,
which decouples the SQLAlchemy rows and the pydantic payloads from what actually crosses the boundaries.
All of them are frozen: a caller holding a snapshot can never mutate server truth in place.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PlayerModel:
    player_id: UUID
    name: str


@dataclass(frozen=True)
class GameSetModel:
    """One scoring session. The creator is an admin whether or not it appears in admin_ids."""

    game_set_id: UUID
    name: str
    created_at: datetime
    creator_id: UUID
    admin_ids: tuple[UUID, ...] = ()
    player_ids: tuple[UUID, ...] = ()


@dataclass(frozen=True)
class ScoreEntryModel:
    """A committed, durable score of one player in one round."""

    game_set_id: UUID
    player_id: UUID
    round_number: int
    score: int
    creator_id: UUID
    created_at: datetime


@dataclass(frozen=True)
class UserModel:
    """What the identity collaborator knows about an authenticated user."""

    user_id: UUID
    email: str
    display_name: str | None = None
