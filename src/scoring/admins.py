"""
Admin authorization for a game set.

The creator is always an admin without being stored in admin_ids, so "creator can never be removed"
is enforced here and nowhere else. Nothing is cached: every check looks at the set it is given.
"""

from dataclasses import replace
from uuid import UUID

from src.core.exceptions import (
    AlreadyAdminError,
    CannotRemoveCreatorError,
    NotAnAdminError,
    NotAuthorizedError,
)
from src.core.models import GameSetModel


def is_admin(game_set: GameSetModel, user_id: UUID) -> bool:
    return user_id == game_set.creator_id or user_id in game_set.admin_ids


def require_admin(game_set: GameSetModel, user_id: UUID) -> None:
    if not is_admin(game_set, user_id):
        raise NotAuthorizedError(
            f"User {user_id} is not an admin of game set {game_set.game_set_id}."
        )


def require_creator(game_set: GameSetModel, user_id: UUID) -> None:
    if user_id != game_set.creator_id:
        raise NotAuthorizedError(
            f"Only the creator of game set {game_set.game_set_id} can do this."
        )


def grant_admin(
    game_set: GameSetModel, requested_by: UUID, target_id: UUID
) -> GameSetModel:
    """Any admin may promote another user. Returns the updated set."""
    require_admin(game_set, requested_by)
    if is_admin(game_set, target_id):
        raise AlreadyAdminError(
            f"User {target_id} is already an admin of game set {game_set.game_set_id}."
        )
    return replace(game_set, admin_ids=(*game_set.admin_ids, target_id))


def revoke_admin(
    game_set: GameSetModel, requested_by: UUID, target_id: UUID
) -> GameSetModel:
    """Only the creator may demote, and the creator itself can never be demoted."""
    require_creator(game_set, requested_by)
    if target_id == game_set.creator_id:
        raise CannotRemoveCreatorError("The creator of a game set is always an admin.")
    if target_id not in game_set.admin_ids:
        raise NotAnAdminError(
            f"User {target_id} is not an admin of game set {game_set.game_set_id}."
        )
    return replace(
        game_set,
        admin_ids=tuple(admin for admin in game_set.admin_ids if admin != target_id),
    )
