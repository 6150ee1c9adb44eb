"""Rules for player display names."""

from typing import Iterable

from src.core.exceptions import EmptyNameError
from src.core.models import PlayerModel


def normalize_name(name: str) -> str:
    """Trim surrounding whitespace and refuse names that end up empty."""
    trimmed = name.strip()
    if not trimmed:
        raise EmptyNameError("Player name cannot be empty.")
    return trimmed


def find_name_clash(name: str, existing: Iterable[PlayerModel]) -> PlayerModel | None:
    """Return the existing player whose name matches case-insensitively after trimming, if any."""
    wanted = name.strip().casefold()
    return next(
        (player for player in existing if player.name.strip().casefold() == wanted),
        None,
    )


def sort_players(players: Iterable[PlayerModel]) -> list[PlayerModel]:
    """Alphabetical by name. Ties are ordered by id so the listing never shuffles."""
    return sorted(players, key=lambda p: (p.name.casefold(), p.name, str(p.player_id)))
