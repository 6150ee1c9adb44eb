"""Canonical player identities, shared by every game set."""

from typing import Iterable
from uuid import UUID

from src.core.exceptions import DuplicateNameError
from src.core.logger import get_logger
from src.core.models import PlayerModel
from src.db.repository import PlayerRepository
from src.scoring.players import find_name_clash, normalize_name, sort_players

logger = get_logger("services.player_registry")


class PlayerRegistry:
    def __init__(self, repository: PlayerRepository) -> None:
        self.repo = repository

    def list_players(self) -> list[PlayerModel]:
        """All players, alphabetical by name."""
        return sort_players(self.repo.list_players())

    def create_player(self, name: str) -> PlayerModel:
        """Register a new player. Names are unique regardless of case and surrounding whitespace."""
        trimmed = normalize_name(name)
        clash = find_name_clash(trimmed, self.repo.list_players())
        if clash is not None:
            logger.info("Rejected player %r: name taken by %s", trimmed, clash.player_id)
            raise DuplicateNameError(f"A player named {clash.name!r} already exists.")
        player = self.repo.create_player(trimmed)
        logger.info("Created player %s (%r)", player.player_id, player.name)
        return player

    def get_players_by_ids(self, player_ids: Iterable[UUID]) -> dict[UUID, PlayerModel]:
        return self.repo.get_players(player_ids)
