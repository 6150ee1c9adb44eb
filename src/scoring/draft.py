"""
Scores being edited for the upcoming round.

A RoundDraft is deliberately a different type than a committed ScoreEntryModel:
it lives with one client session, is never written piecemeal, and only becomes durable through the Round Ledger.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Self
from uuid import UUID

from src.core.models import PlayerModel
from src.core.shared_types import SCORE_MAX, SCORE_MIN


@dataclass(frozen=True)
class DraftScore:
    player_id: UUID
    score: int = 0


@dataclass(frozen=True)
class RoundDraft:
    scores: tuple[DraftScore, ...]

    @classmethod
    def zero_filled(cls, roster: Iterable[PlayerModel]) -> Self:
        """One zero score per roster player, in roster order."""
        return cls(tuple(DraftScore(player.player_id) for player in roster))

    @property
    def player_ids(self) -> list[UUID]:
        return [s.player_id for s in self.scores]

    def score_for(self, player_id: UUID) -> int:
        for draft_score in self.scores:
            if draft_score.player_id == player_id:
                return draft_score.score
        raise KeyError(player_id)

    def set_score(self, player_id: UUID, score: int) -> Self:
        """Return a new draft with the player's score replaced (range is checked at commit time)."""
        if player_id not in self.player_ids:
            raise KeyError(player_id)
        return replace(
            self,
            scores=tuple(
                DraftScore(s.player_id, score) if s.player_id == player_id else s
                for s in self.scores
            ),
        )

    def increment(self, player_id: UUID) -> Self:
        return self.set_score(player_id, min(self.score_for(player_id) + 1, SCORE_MAX))

    def decrement(self, player_id: UUID) -> Self:
        return self.set_score(player_id, max(self.score_for(player_id) - 1, SCORE_MIN))
