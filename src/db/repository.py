"""Protocol repositories (can implement later for another store than SQL Alchemy)"""

from typing import Iterable, Protocol, Sequence
from uuid import UUID

from src.core.models import GameSetModel, PlayerModel, ScoreEntryModel, UserModel


class PlayerRepository(Protocol):
    """Persistence of player identities. Players are never deleted."""

    def list_players(self) -> list[PlayerModel]:
        """All known players."""
        ...

    def create_player(self, name: str) -> PlayerModel:
        """Store a new player and return it with its new ID."""
        ...

    def get_players(self, player_ids: Iterable[UUID]) -> dict[UUID, PlayerModel]:
        """Players matching the given IDs. Unknown IDs are left out."""
        ...


class GameSetRepository(Protocol):
    """Persistence of game sets, their admins and their rosters."""

    def get_game_set(self, game_set_id: UUID) -> GameSetModel | None:
        """Get game set by ID, if record exists."""
        ...

    def list_game_sets(self) -> list[GameSetModel]:
        """All game sets, newest first."""
        ...

    def create_game_set(
        self, name: str, creator_id: UUID, player_ids: Sequence[UUID]
    ) -> GameSetModel:
        """Store a new game set and return it with its new ID and creation time."""
        ...

    def update_admins(
        self, game_set_id: UUID, admin_ids: Sequence[UUID]
    ) -> GameSetModel | None:
        """Replace the secondary admins of a game set."""
        ...

    def update_players(
        self, game_set_id: UUID, player_ids: Sequence[UUID]
    ) -> GameSetModel | None:
        """Replace the roster of a game set."""
        ...

    def delete_game_set(self, game_set_id: UUID) -> GameSetModel | None:
        """Remove a game set together with its score entries."""
        ...


class ScoreRepository(Protocol):
    """Append-only store of score entries."""

    def list_entries(self, game_set_id: UUID) -> list[ScoreEntryModel]:
        """Entries of a game set ordered by round number."""
        ...

    def latest_round_number(self, game_set_id: UUID) -> int:
        """Highest recorded round number of a game set, 0 when it has none."""
        ...

    def add_entries(self, entries: Sequence[ScoreEntryModel]) -> list[ScoreEntryModel]:
        """
        Insert all entries at once, or none of them.
        Raises DuplicateEntryError when (game set, player, round number) already exists.
        """
        ...


class IdentityResolver(Protocol):
    """Lookups against whoever issues user identities."""

    def resolve_email(self, email: str) -> UUID | None:
        """User ID for an email address, if such a user exists."""
        ...

    def fetch_users(self, user_ids: Iterable[UUID]) -> dict[UUID, UserModel]:
        """Users matching the given IDs. Unknown IDs are left out."""
        ...
