"""Ranked cumulative totals, always recomputed from the full list of entries."""

from dataclasses import dataclass
from typing import Iterable, Sequence

from src.core.models import PlayerModel, ScoreEntryModel


@dataclass(frozen=True)
class LeaderboardRow:
    player: PlayerModel
    total: int


def aggregate(
    roster: Sequence[PlayerModel], entries: Iterable[ScoreEntryModel]
) -> list[LeaderboardRow]:
    """
    Total every roster player's scores and rank them, highest first.

    Players without entries appear with 0. Equal totals keep roster order (sorted() is stable),
    so recomputing over the same inputs always yields the same ordering.
    Entries of players that are not on the roster are ignored.
    """
    totals = {player.player_id: 0 for player in roster}
    for entry in entries:
        if entry.player_id in totals:
            totals[entry.player_id] += entry.score

    rows = [LeaderboardRow(player, totals[player.player_id]) for player in roster]
    return sorted(rows, key=lambda row: row.total, reverse=True)
