"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

from dataclasses import dataclass
from typing import Sequence
from uuid import UUID

from src.core.exceptions import (
    EmptyNameError,
    InvalidGameSetError,
    PlayerNotFoundError,
    SetNotFoundError,
)
from src.core.logger import get_logger
from src.core.models import (
    GameSetModel,
    PlayerModel,
    ScoreEntryModel,
    UserModel,
)
from src.db.repository import (
    GameSetRepository,
    IdentityResolver,
    PlayerRepository,
    ScoreRepository,
)
from src.scoring.admins import is_admin, require_admin, require_creator
from src.scoring.draft import RoundDraft
from src.scoring.leaderboard import LeaderboardRow, aggregate
from src.scoring.players import normalize_name
from src.services.admin_service import AdminService
from src.services.player_registry import PlayerRegistry
from src.services.round_ledger import RoundLedger

logger = get_logger("services.session_service")

MIN_PLAYERS_PER_SET = 2


@dataclass(frozen=True)
class SetSnapshot:
    """Everything a client needs to show a game set, read in one go."""

    game_set: GameSetModel
    roster: tuple[PlayerModel, ...]
    entries: tuple[ScoreEntryModel, ...]
    next_round: int
    is_viewer_admin: bool
    leaderboard: tuple[LeaderboardRow, ...]


@dataclass(frozen=True)
class RoundResult:
    """Outcome of saving a round, so the caller never needs to re-fetch."""

    entries: tuple[ScoreEntryModel, ...]
    leaderboard: tuple[LeaderboardRow, ...]


class SessionService:
    """Orchestration of layers for a scoring session."""

    def __init__(
        self,
        players: PlayerRepository,
        game_sets: GameSetRepository,
        scores: ScoreRepository,
        identity: IdentityResolver,
    ) -> None:
        self.game_sets = game_sets
        self.registry = PlayerRegistry(players)
        self.ledger = RoundLedger(scores, game_sets, players)
        self.admins = AdminService(game_sets, identity)

    # -- Game sets --
    def load_set(self, game_set_id: UUID, viewer_id: UUID) -> SetSnapshot:
        game_set = self._fetch_game_set(game_set_id)
        roster = self._roster(game_set)
        entries = self.ledger.list_entries(game_set_id)
        return SetSnapshot(
            game_set=game_set,
            roster=tuple(roster),
            entries=tuple(entries),
            next_round=self.ledger.next_round_number(game_set_id),
            is_viewer_admin=is_admin(game_set, viewer_id),
            leaderboard=tuple(aggregate(roster, entries)),
        )

    def list_sets(self) -> list[GameSetModel]:
        """All game sets, newest first."""
        return self.game_sets.list_game_sets()

    def create_set(
        self, name: str, creator_id: UUID, player_ids: Sequence[UUID]
    ) -> GameSetModel:
        """Start a new game set with at least two distinct, registered players."""
        try:
            set_name = normalize_name(name)
        except EmptyNameError as exc:
            raise InvalidGameSetError("Game set name cannot be empty.") from exc

        roster_ids = list(dict.fromkeys(player_ids))
        if len(roster_ids) != len(player_ids):
            raise InvalidGameSetError("A player can only be added to a game set once.")
        if len(roster_ids) < MIN_PLAYERS_PER_SET:
            raise InvalidGameSetError(
                f"A game set needs at least {MIN_PLAYERS_PER_SET} players."
            )
        known = self.registry.get_players_by_ids(roster_ids)
        unknown = [player_id for player_id in roster_ids if player_id not in known]
        if unknown:
            raise PlayerNotFoundError(f"Unknown players: {', '.join(map(str, unknown))}.")

        game_set = self.game_sets.create_game_set(set_name, creator_id, roster_ids)
        logger.info(
            "Created game set %s (%r) for %s players by %s",
            game_set.game_set_id,
            game_set.name,
            len(roster_ids),
            creator_id,
        )
        return game_set

    def delete_set(self, game_set_id: UUID, requested_by: UUID) -> GameSetModel:
        """Delete a game set and its whole ledger. Only the creator may do this."""
        game_set = self._fetch_game_set(game_set_id)
        require_creator(game_set, requested_by)
        deleted = self.game_sets.delete_game_set(game_set_id)
        if deleted is None:
            raise SetNotFoundError(f"Game set with {game_set_id=} not found.")
        logger.info("Deleted game set %s by %s", game_set_id, requested_by)
        return deleted

    def add_player_to_set(
        self, game_set_id: UUID, requested_by: UUID, player_id: UUID
    ) -> GameSetModel:
        return self.ledger.add_player(game_set_id, requested_by, player_id)

    # -- Rounds --
    @staticmethod
    def prepare_round_draft(roster: Sequence[PlayerModel]) -> RoundDraft:
        """Zero-filled scores for the next round. Held by the client until saved."""
        return RoundDraft.zero_filled(roster)

    def save_round(
        self,
        game_set_id: UUID,
        round_number: int,
        draft: RoundDraft,
        actor_id: UUID,
    ) -> RoundResult:
        """Commit the draft as one round, then recompute the leaderboard from every stored entry."""
        game_set = self._fetch_game_set(game_set_id)
        require_admin(game_set, actor_id)

        committed = self.ledger.commit_round(
            game_set_id, round_number, draft.scores, actor_id
        )
        entries = self.ledger.list_entries(game_set_id)
        roster = self._roster(game_set)
        logger.debug(
            "Round %s of game set %s stored %s entries",
            round_number,
            game_set_id,
            len(committed),
        )
        return RoundResult(
            entries=tuple(entries), leaderboard=tuple(aggregate(roster, entries))
        )

    # -- Admins --
    def add_admin(
        self, game_set_id: UUID, requested_by: UUID, target_email: str
    ) -> GameSetModel:
        return self.admins.add_admin(game_set_id, requested_by, target_email)

    def remove_admin(
        self, game_set_id: UUID, requested_by: UUID, target_user_id: UUID
    ) -> GameSetModel:
        return self.admins.remove_admin(game_set_id, requested_by, target_user_id)

    def list_admins(self, game_set_id: UUID) -> list[UserModel]:
        return self.admins.list_admins(game_set_id)

    # -- Players --
    def list_players(self) -> list[PlayerModel]:
        return self.registry.list_players()

    def create_player(self, name: str) -> PlayerModel:
        return self.registry.create_player(name)

    # -- Internal helpers --
    def _roster(self, game_set: GameSetModel) -> list[PlayerModel]:
        """Players of the set in roster order. IDs missing from the registry are skipped."""
        players = self.registry.get_players_by_ids(game_set.player_ids)
        return [players[pid] for pid in game_set.player_ids if pid in players]

    def _fetch_game_set(self, game_set_id: UUID) -> GameSetModel:
        """Attempt to find the game set in the repository and raise error if it fails."""
        game_set = self.game_sets.get_game_set(game_set_id)
        if game_set is None:
            raise SetNotFoundError(f"Game set with {game_set_id=} not found.")
        return game_set
