"""Append-only log of per-round, per-player scores of a game set."""

from typing import Sequence
from uuid import UUID

from src.core.exceptions import (
    DuplicateEntryError,
    PlayerAlreadyInSetError,
    PlayerNotFoundError,
    SetNotFoundError,
    StaleRoundError,
)
from src.core.logger import get_logger
from src.core.models import GameSetModel, ScoreEntryModel
from src.db.repository import GameSetRepository, PlayerRepository, ScoreRepository
from src.scoring.admins import require_admin
from src.scoring.draft import DraftScore
from src.scoring.rounds import build_entries, validate_round

logger = get_logger("services.round_ledger")


class RoundLedger:
    """
    Accepts and retrieves rounds for one game set at a time.

    The next round number is always derived from the stored entries, never from a counter held by a client,
    so a client that missed another admin's save gets a StaleRoundError instead of a gap or a duplicate.
    """

    def __init__(
        self,
        scores: ScoreRepository,
        game_sets: GameSetRepository,
        players: PlayerRepository,
    ) -> None:
        self.scores = scores
        self.game_sets = game_sets
        self.players = players

    def next_round_number(self, game_set_id: UUID) -> int:
        return self.scores.latest_round_number(game_set_id) + 1

    def list_entries(self, game_set_id: UUID) -> list[ScoreEntryModel]:
        """Entries ordered by round number, ascending."""
        return self.scores.list_entries(game_set_id)

    def commit_round(
        self,
        game_set_id: UUID,
        round_number: int,
        scores: Sequence[DraftScore],
        actor_id: UUID,
    ) -> list[ScoreEntryModel]:
        """
        Record one complete round, all entries or none.

        Raises:
            SetNotFoundError, StaleRoundError, IncompleteRoundError, ScoreOutOfRangeError.
        """
        game_set = self._fetch_game_set(game_set_id)
        expected_round = self.next_round_number(game_set_id)
        try:
            validate_round(game_set.player_ids, round_number, expected_round, scores)
        except StaleRoundError:
            logger.warning(
                "Stale round %s for game set %s (next is %s)",
                round_number,
                game_set_id,
                expected_round,
            )
            raise

        entries = build_entries(game_set_id, round_number, scores, actor_id)
        try:
            committed = self.scores.add_entries(entries)
        except DuplicateEntryError as exc:
            # Another writer saved this round between our read and our insert
            fresh_round = self.next_round_number(game_set_id)
            logger.warning(
                "Lost race for round %s of game set %s (next is %s)",
                round_number,
                game_set_id,
                fresh_round,
            )
            raise StaleRoundError(round_number, fresh_round) from exc

        logger.info(
            "Committed round %s of game set %s (%s entries) by %s",
            round_number,
            game_set_id,
            len(committed),
            actor_id,
        )
        return committed

    def add_player(
        self, game_set_id: UUID, requested_by: UUID, player_id: UUID
    ) -> GameSetModel:
        """Put a registered player on the roster. Rounds recorded before are left as they are."""
        game_set = self._fetch_game_set(game_set_id)
        require_admin(game_set, requested_by)
        if player_id in game_set.player_ids:
            raise PlayerAlreadyInSetError(
                f"Player {player_id} already plays in game set {game_set_id}."
            )
        if player_id not in self.players.get_players([player_id]):
            raise PlayerNotFoundError(f"Player with {player_id=} not found.")

        updated = self.game_sets.update_players(
            game_set_id, (*game_set.player_ids, player_id)
        )
        if updated is None:
            raise SetNotFoundError(f"Game set with {game_set_id=} not found.")
        logger.info("Added player %s to game set %s", player_id, game_set_id)
        return updated

    def _fetch_game_set(self, game_set_id: UUID) -> GameSetModel:
        game_set = self.game_sets.get_game_set(game_set_id)
        if game_set is None:
            raise SetNotFoundError(f"Game set with {game_set_id=} not found.")
        return game_set
