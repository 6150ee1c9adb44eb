"""Unit tests for src/services/admin_service.py"""

from uuid import UUID, uuid4

import pytest

from src.core.exceptions import (
    AlreadyAdminError,
    CannotRemoveCreatorError,
    NotAnAdminError,
    NotAuthorizedError,
    SetNotFoundError,
    UserNotFoundError,
)
from src.core.models import GameSetModel
from src.db.sql_repository import SQLGameSetRepository, SQLIdentityResolver
from src.services.admin_service import AdminService


@pytest.fixture
def admins(
    game_set_repo: SQLGameSetRepository, identity: SQLIdentityResolver
) -> AdminService:
    return AdminService(game_set_repo, identity)


def test_add_then_remove_admin(
    admins: AdminService,
    game_set_repo: SQLGameSetRepository,
    game_set: GameSetModel,
    users: dict[str, UUID],
) -> None:
    """u1 creates, promotes u2 by email, u2 cannot demote u1, u1 demotes u2."""
    u1, u2 = users["u1"], users["u2"]
    assert not admins.is_admin(game_set, u2)

    updated = admins.add_admin(game_set.game_set_id, u1, "u2@example.com")
    assert updated.admin_ids == (u2,)
    stored = game_set_repo.get_game_set(game_set.game_set_id)
    assert stored is not None and admins.is_admin(stored, u2)

    with pytest.raises(NotAuthorizedError):
        admins.remove_admin(game_set.game_set_id, u2, u1)

    updated = admins.remove_admin(game_set.game_set_id, u1, u2)
    assert not admins.is_admin(updated, u2)
    stored = game_set_repo.get_game_set(game_set.game_set_id)
    assert stored is not None and not admins.is_admin(stored, u2)


def test_secondary_admin_can_add_admins(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    admins.add_admin(game_set.game_set_id, users["u1"], "u2@example.com")
    updated = admins.add_admin(game_set.game_set_id, users["u2"], "U3@example.com")
    assert updated.admin_ids == (users["u2"], users["u3"])


def test_non_admin_cannot_add(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    with pytest.raises(NotAuthorizedError):
        admins.add_admin(game_set.game_set_id, users["u2"], "u3@example.com")


def test_non_admin_is_rejected_before_email_lookup(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    with pytest.raises(NotAuthorizedError):
        admins.add_admin(game_set.game_set_id, users["u2"], "nobody@example.com")


def test_unknown_email(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    with pytest.raises(UserNotFoundError):
        admins.add_admin(game_set.game_set_id, users["u1"], "nobody@example.com")


@pytest.mark.parametrize("email", ["u1@example.com", "u2@example.com"])
def test_already_admin(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID], email: str
) -> None:
    admins.add_admin(game_set.game_set_id, users["u1"], "u2@example.com")
    with pytest.raises(AlreadyAdminError):
        admins.add_admin(game_set.game_set_id, users["u1"], email)


def test_creator_cannot_be_removed(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    with pytest.raises(CannotRemoveCreatorError):
        admins.remove_admin(game_set.game_set_id, users["u1"], users["u1"])


@pytest.mark.parametrize("target", ["u1", "u2", "u3"])
def test_non_creator_can_never_remove(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID], target: str
) -> None:
    admins.add_admin(game_set.game_set_id, users["u1"], "u2@example.com")
    admins.add_admin(game_set.game_set_id, users["u1"], "u3@example.com")
    with pytest.raises(NotAuthorizedError):
        admins.remove_admin(game_set.game_set_id, users["u2"], users[target])


def test_remove_non_admin(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    with pytest.raises(NotAnAdminError):
        admins.remove_admin(game_set.game_set_id, users["u1"], users["u3"])


def test_unknown_game_set(admins: AdminService, users: dict[str, UUID]) -> None:
    with pytest.raises(SetNotFoundError):
        admins.add_admin(uuid4(), users["u1"], "u2@example.com")
    with pytest.raises(SetNotFoundError):
        admins.remove_admin(uuid4(), users["u1"], users["u2"])
    with pytest.raises(SetNotFoundError):
        admins.list_admins(uuid4())


def test_list_admins(
    admins: AdminService, game_set: GameSetModel, users: dict[str, UUID]
) -> None:
    admins.add_admin(game_set.game_set_id, users["u1"], "u3@example.com")
    listed = admins.list_admins(game_set.game_set_id)
    assert [u.user_id for u in listed] == [users["u1"], users["u3"]]
    assert [u.email for u in listed] == ["u1@example.com", "u3@example.com"]


def test_list_admins_skips_unknown_users(
    admins: AdminService, game_set_repo: SQLGameSetRepository, users: dict[str, UUID]
) -> None:
    ghost_creator = uuid4()
    game_set = game_set_repo.create_game_set("ghosts", ghost_creator, [])
    game_set_repo.update_admins(game_set.game_set_id, [users["u2"]])
    assert [u.user_id for u in admins.list_admins(game_set.game_set_id)] == [users["u2"]]
