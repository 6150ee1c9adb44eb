"""Implementation of the repositories using SQLAlchemy"""

from datetime import datetime, timezone
from typing import Iterable, Sequence
from uuid import UUID, uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.core.exceptions import DuplicateEntryError
from src.core.models import GameSetModel, PlayerModel, ScoreEntryModel, UserModel
from src.db.schema import DBGameSet, DBPlayer, DBScoreEntry, DBUser


def _as_utc(moment: datetime) -> datetime:
    """SQLite hands back naive datetimes. Everything we store is UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class SQLPlayerRepository:
    """Players stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def list_players(self) -> list[PlayerModel]:
        query = select(DBPlayer).order_by(DBPlayer.name, DBPlayer.id)
        return [self._to_model(row) for row in self.db.scalars(query)]

    def create_player(self, name: str) -> PlayerModel:
        player_db = DBPlayer(id=uuid4(), name=name)
        self.db.add(player_db)
        self.db.commit()
        self.db.refresh(player_db)
        return self._to_model(player_db)

    def get_players(self, player_ids: Iterable[UUID]) -> dict[UUID, PlayerModel]:
        wanted = set(player_ids)
        if not wanted:
            return {}
        query = select(DBPlayer).where(DBPlayer.id.in_(wanted))
        return {row.id: self._to_model(row) for row in self.db.scalars(query)}

    def _to_model(self, player_db: DBPlayer) -> PlayerModel:
        return PlayerModel(player_id=player_db.id, name=player_db.name)


class SQLGameSetRepository:
    """Game sets stored using SQL. Admin and player IDs live in JSON columns."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game_set(self, game_set_id: UUID) -> GameSetModel | None:
        game_set_db = self._fetch_game_set(game_set_id)
        if game_set_db:
            return self._to_model(game_set_db)
        return None

    def list_game_sets(self) -> list[GameSetModel]:
        query = select(DBGameSet).order_by(DBGameSet.created_at.desc())
        return [self._to_model(row) for row in self.db.scalars(query)]

    def create_game_set(
        self, name: str, creator_id: UUID, player_ids: Sequence[UUID]
    ) -> GameSetModel:
        game_set_db = DBGameSet(
            id=uuid4(),
            name=name,
            creator_id=creator_id,
            admin_ids=[],
            player_ids=[str(player_id) for player_id in player_ids],
        )
        self.db.add(game_set_db)
        self.db.commit()
        self.db.refresh(game_set_db)
        return self._to_model(game_set_db)

    def update_admins(
        self, game_set_id: UUID, admin_ids: Sequence[UUID]
    ) -> GameSetModel | None:
        game_set_db = self._fetch_game_set(game_set_id)
        if not game_set_db:
            return None
        game_set_db.admin_ids = [str(admin_id) for admin_id in admin_ids]
        self.db.commit()
        self.db.refresh(game_set_db)
        return self._to_model(game_set_db)

    def update_players(
        self, game_set_id: UUID, player_ids: Sequence[UUID]
    ) -> GameSetModel | None:
        game_set_db = self._fetch_game_set(game_set_id)
        if not game_set_db:
            return None
        game_set_db.player_ids = [str(player_id) for player_id in player_ids]
        self.db.commit()
        self.db.refresh(game_set_db)
        return self._to_model(game_set_db)

    def delete_game_set(self, game_set_id: UUID) -> GameSetModel | None:
        game_set_db = self._fetch_game_set(game_set_id)
        if not game_set_db:
            return None
        game_set_model = self._to_model(game_set_db)
        # SQLite does not enforce ON DELETE CASCADE unless told to, so remove the entries explicitly
        self.db.execute(
            delete(DBScoreEntry).where(DBScoreEntry.game_set_id == game_set_id)
        )
        self.db.delete(game_set_db)
        self.db.commit()
        return game_set_model

    def _fetch_game_set(self, game_set_id: UUID) -> DBGameSet | None:
        query = select(DBGameSet).where(DBGameSet.id == game_set_id)
        return self.db.scalar(query)

    def _to_model(self, game_set_db: DBGameSet) -> GameSetModel:
        return GameSetModel(
            game_set_id=game_set_db.id,
            name=game_set_db.name,
            created_at=_as_utc(game_set_db.created_at),
            creator_id=game_set_db.creator_id,
            admin_ids=tuple(UUID(admin_id) for admin_id in game_set_db.admin_ids),
            player_ids=tuple(UUID(player_id) for player_id in game_set_db.player_ids),
        )


class SQLScoreRepository:
    """Score entries stored using SQL. The unique constraint is what settles two racing writers."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def list_entries(self, game_set_id: UUID) -> list[ScoreEntryModel]:
        query = (
            select(DBScoreEntry)
            .where(DBScoreEntry.game_set_id == game_set_id)
            .order_by(DBScoreEntry.round_number, DBScoreEntry.player_id)
        )
        return [self._to_model(row) for row in self.db.scalars(query)]

    def latest_round_number(self, game_set_id: UUID) -> int:
        query = select(func.max(DBScoreEntry.round_number)).where(
            DBScoreEntry.game_set_id == game_set_id
        )
        return self.db.scalar(query) or 0

    def add_entries(self, entries: Sequence[ScoreEntryModel]) -> list[ScoreEntryModel]:
        rows = [
            DBScoreEntry(
                id=uuid4(),
                game_set_id=entry.game_set_id,
                player_id=entry.player_id,
                round_number=entry.round_number,
                score=entry.score,
                creator_id=entry.creator_id,
                created_at=entry.created_at,
            )
            for entry in entries
        ]
        self.db.add_all(rows)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEntryError(
                "Score entries for this round have already been recorded."
            ) from exc
        for row in rows:
            self.db.refresh(row)
        return [self._to_model(row) for row in rows]

    def _to_model(self, entry_db: DBScoreEntry) -> ScoreEntryModel:
        return ScoreEntryModel(
            game_set_id=entry_db.game_set_id,
            player_id=entry_db.player_id,
            round_number=entry_db.round_number,
            score=entry_db.score,
            creator_id=entry_db.creator_id,
            created_at=_as_utc(entry_db.created_at),
        )


class SQLIdentityResolver:
    """Resolves users from the mirrored users table."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def resolve_email(self, email: str) -> UUID | None:
        query = select(DBUser.id).where(
            func.lower(DBUser.email) == email.strip().lower()
        )
        return self.db.scalar(query)

    def fetch_users(self, user_ids: Iterable[UUID]) -> dict[UUID, UserModel]:
        wanted = set(user_ids)
        if not wanted:
            return {}
        query = select(DBUser).where(DBUser.id.in_(wanted))
        return {
            row.id: UserModel(user_id=row.id, email=row.email, display_name=row.display_name)
            for row in self.db.scalars(query)
        }
