"""
Round numbering and round validation.

Rounds of a game set are numbered 1, 2, ..., R without gaps and the next round is always R + 1.
A round holds exactly one score per roster player, each within [SCORE_MIN, SCORE_MAX].
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Sequence
from uuid import UUID

from src.core.exceptions import (
    IncompleteRoundError,
    ScoreOutOfRangeError,
    StaleRoundError,
)
from src.core.models import ScoreEntryModel
from src.core.shared_types import SCORE_MAX, SCORE_MIN
from src.scoring.draft import DraftScore


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_round_number(round_numbers: Iterable[int]) -> int:
    """1 + the highest recorded round number (0 when nothing has been recorded)."""
    return 1 + max(round_numbers, default=0)


def is_valid_score(score: object) -> bool:
    # bool is an int subclass, but True is not a score
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return SCORE_MIN <= score <= SCORE_MAX


def validate_round(
    roster_ids: Sequence[UUID],
    round_number: int,
    expected_round: int,
    scores: Sequence[DraftScore],
) -> None:
    """
    Check a round before anything is written.

    Raises (in this order):
        StaleRoundError: round_number is not the next round to record.
        IncompleteRoundError: scores do not cover the roster exactly once.
        ScoreOutOfRangeError: a score falls outside the allowed range.
    """
    if round_number != expected_round:
        raise StaleRoundError(round_number, expected_round)

    counts = Counter(s.player_id for s in scores)
    roster = set(roster_ids)
    missing = roster - counts.keys()
    unexpected = counts.keys() - roster
    duplicated = {player_id for player_id, n in counts.items() if n > 1}
    if missing or unexpected or duplicated:
        raise IncompleteRoundError(missing, unexpected, duplicated)

    for draft_score in scores:
        if not is_valid_score(draft_score.score):
            raise ScoreOutOfRangeError(draft_score.player_id, draft_score.score)


def build_entries(
    game_set_id: UUID,
    round_number: int,
    scores: Sequence[DraftScore],
    actor_id: UUID,
    created_at: datetime | None = None,
) -> list[ScoreEntryModel]:
    """Turn a validated draft into the entries of one round, all sharing the same timestamp."""
    created_at = created_at or utc_now()
    return [
        ScoreEntryModel(
            game_set_id=game_set_id,
            player_id=s.player_id,
            round_number=round_number,
            score=s.score,
            creator_id=actor_id,
            created_at=created_at,
        )
        for s in scores
    ]
