"""Requests and Response models"""

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import GameSetModel, PlayerModel, ScoreEntryModel, UserModel
from src.scoring.draft import DraftScore, RoundDraft
from src.scoring.leaderboard import LeaderboardRow
from src.services.session_service import RoundResult, SetSnapshot


# --- REQUEST MODELS ---
class CreatePlayerRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value


class CreateGameSetRequest(BaseModel):
    name: str
    creator_id: UUID
    player_ids: list[UUID]

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Game set name cannot be empty.")
        return value


class AddPlayerToSetRequest(BaseModel):
    requested_by: UUID
    player_id: UUID


class ScoreInput(BaseModel):
    player_id: UUID
    score: int


class SaveRoundRequest(BaseModel):
    actor_id: UUID
    round_number: int
    scores: list[ScoreInput]

    @field_validator("round_number")
    @classmethod
    def validate_round_number(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(f"Round numbers start at 1, got {value}.")
        return value

    def to_draft(self) -> RoundDraft:
        return RoundDraft(tuple(DraftScore(s.player_id, s.score) for s in self.scores))


class AddAdminRequest(BaseModel):
    requested_by: UUID
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip()
        local, _, domain = value.partition("@")
        if not local or not domain:
            raise InvalidRequestError(f"{value!r} is not an email address.")
        return value


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    player_id: UUID
    name: str

    @classmethod
    def from_model(cls, player: PlayerModel) -> Self:
        return cls(player_id=player.player_id, name=player.name)


class GameSetResponse(BaseModel):
    game_set_id: UUID
    name: str
    created_at: datetime
    creator_id: UUID
    admin_ids: list[UUID]
    player_ids: list[UUID]

    @classmethod
    def from_model(cls, game_set: GameSetModel) -> Self:
        return cls(
            game_set_id=game_set.game_set_id,
            name=game_set.name,
            created_at=game_set.created_at,
            creator_id=game_set.creator_id,
            admin_ids=list(game_set.admin_ids),
            player_ids=list(game_set.player_ids),
        )


class ScoreEntryResponse(BaseModel):
    player_id: UUID
    round_number: int
    score: int
    creator_id: UUID
    created_at: datetime

    @classmethod
    def from_model(cls, entry: ScoreEntryModel) -> Self:
        return cls(
            player_id=entry.player_id,
            round_number=entry.round_number,
            score=entry.score,
            creator_id=entry.creator_id,
            created_at=entry.created_at,
        )


class LeaderboardRowResponse(BaseModel):
    player: PlayerResponse
    total: int

    @classmethod
    def from_row(cls, row: LeaderboardRow) -> Self:
        return cls(player=PlayerResponse.from_model(row.player), total=row.total)


class SetResponse(BaseModel):
    game_set: GameSetResponse
    roster: list[PlayerResponse]
    entries: list[ScoreEntryResponse]
    next_round: int
    is_viewer_admin: bool
    leaderboard: list[LeaderboardRowResponse]

    @classmethod
    def from_snapshot(cls, snapshot: SetSnapshot) -> Self:
        return cls(
            game_set=GameSetResponse.from_model(snapshot.game_set),
            roster=[PlayerResponse.from_model(p) for p in snapshot.roster],
            entries=[ScoreEntryResponse.from_model(e) for e in snapshot.entries],
            next_round=snapshot.next_round,
            is_viewer_admin=snapshot.is_viewer_admin,
            leaderboard=[LeaderboardRowResponse.from_row(r) for r in snapshot.leaderboard],
        )


class DraftResponse(BaseModel):
    round_number: int
    scores: list[ScoreInput]

    @classmethod
    def from_draft(cls, round_number: int, draft: RoundDraft) -> Self:
        return cls(
            round_number=round_number,
            scores=[ScoreInput(player_id=s.player_id, score=s.score) for s in draft.scores],
        )


class RoundResponse(BaseModel):
    entries: list[ScoreEntryResponse]
    leaderboard: list[LeaderboardRowResponse]

    @classmethod
    def from_result(cls, result: RoundResult) -> Self:
        return cls(
            entries=[ScoreEntryResponse.from_model(e) for e in result.entries],
            leaderboard=[LeaderboardRowResponse.from_row(r) for r in result.leaderboard],
        )


class AdminResponse(BaseModel):
    user_id: UUID
    email: str
    display_name: str | None

    @classmethod
    def from_model(cls, user: UserModel) -> Self:
        return cls(user_id=user.user_id, email=user.email, display_name=user.display_name)


class ErrorDetail(BaseModel):
    category: str
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
