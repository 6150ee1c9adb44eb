"""Admin management of a game set: who may add/remove admins and change the set."""

from uuid import UUID

from src.core.exceptions import SetNotFoundError, UserNotFoundError
from src.core.logger import get_logger
from src.core.models import GameSetModel, UserModel
from src.db.repository import GameSetRepository, IdentityResolver
from src.scoring.admins import grant_admin, is_admin, require_admin, revoke_admin

logger = get_logger("services.admin_service")


class AdminService:
    def __init__(
        self, game_sets: GameSetRepository, identity: IdentityResolver
    ) -> None:
        self.game_sets = game_sets
        self.identity = identity

    @staticmethod
    def is_admin(game_set: GameSetModel, user_id: UUID) -> bool:
        return is_admin(game_set, user_id)

    def add_admin(
        self, game_set_id: UUID, requested_by: UUID, target_email: str
    ) -> GameSetModel:
        """
        Promote the user behind an email address to admin.

        Raises:
            SetNotFoundError, NotAuthorizedError, UserNotFoundError, AlreadyAdminError.
        """
        game_set = self._fetch_game_set(game_set_id)
        # Authorize before asking the identity provider anything about the email
        require_admin(game_set, requested_by)

        target_id = self.identity.resolve_email(target_email)
        if target_id is None:
            raise UserNotFoundError(f"No user found with email {target_email!r}.")

        updated = grant_admin(game_set, requested_by, target_id)
        return self._store_admins(updated, f"added admin {target_id}", requested_by)

    def remove_admin(
        self, game_set_id: UUID, requested_by: UUID, target_user_id: UUID
    ) -> GameSetModel:
        """
        Demote a secondary admin. Only the creator may do this.

        Raises:
            SetNotFoundError, NotAuthorizedError, CannotRemoveCreatorError, NotAnAdminError.
        """
        game_set = self._fetch_game_set(game_set_id)
        updated = revoke_admin(game_set, requested_by, target_user_id)
        return self._store_admins(updated, f"removed admin {target_user_id}", requested_by)

    def list_admins(self, game_set_id: UUID) -> list[UserModel]:
        """Creator first, then the secondary admins. Users unknown to the identity provider are left out."""
        game_set = self._fetch_game_set(game_set_id)
        admin_ids = [game_set.creator_id] + [
            admin_id for admin_id in game_set.admin_ids if admin_id != game_set.creator_id
        ]
        users = self.identity.fetch_users(admin_ids)
        return [users[admin_id] for admin_id in admin_ids if admin_id in users]

    def _store_admins(
        self, game_set: GameSetModel, action: str, requested_by: UUID
    ) -> GameSetModel:
        # Whole-list write, so two concurrent admin changes are last-write-wins
        stored = self.game_sets.update_admins(game_set.game_set_id, game_set.admin_ids)
        if stored is None:
            raise SetNotFoundError(f"Game set with game_set_id={game_set.game_set_id} not found.")
        logger.info("Game set %s: %s (by %s)", game_set.game_set_id, action, requested_by)
        return stored

    def _fetch_game_set(self, game_set_id: UUID) -> GameSetModel:
        game_set = self.game_sets.get_game_set(game_set_id)
        if game_set is None:
            raise SetNotFoundError(f"Game set with {game_set_id=} not found.")
        return game_set
