"""Unit tests for src/scoring/admins.py"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from src.core.exceptions import (
    AlreadyAdminError,
    CannotRemoveCreatorError,
    NotAnAdminError,
    NotAuthorizedError,
)
from src.core.models import GameSetModel
from src.scoring.admins import (
    grant_admin,
    is_admin,
    require_admin,
    require_creator,
    revoke_admin,
)

CREATOR = UUID(int=1)
ADMIN = UUID(int=2)
OUTSIDER = UUID(int=3)


@pytest.fixture
def game_set() -> GameSetModel:
    return GameSetModel(
        game_set_id=uuid4(),
        name="Friday cards",
        created_at=datetime(2025, 3, 7, tzinfo=timezone.utc),
        creator_id=CREATOR,
        admin_ids=(ADMIN,),
        player_ids=(uuid4(), uuid4()),
    )


def test_is_admin(game_set: GameSetModel) -> None:
    assert is_admin(game_set, CREATOR)
    assert is_admin(game_set, ADMIN)
    assert not is_admin(game_set, OUTSIDER)


def test_creator_is_admin_without_being_stored(game_set: GameSetModel) -> None:
    assert CREATOR not in game_set.admin_ids
    require_admin(game_set, CREATOR)


def test_require_admin_rejects_outsider(game_set: GameSetModel) -> None:
    with pytest.raises(NotAuthorizedError):
        require_admin(game_set, OUTSIDER)


def test_require_creator_rejects_admin(game_set: GameSetModel) -> None:
    with pytest.raises(NotAuthorizedError):
        require_creator(game_set, ADMIN)


# -- grant_admin --
@pytest.mark.parametrize("requested_by", [CREATOR, ADMIN])
def test_any_admin_can_grant(game_set: GameSetModel, requested_by: UUID) -> None:
    updated = grant_admin(game_set, requested_by, OUTSIDER)
    assert updated.admin_ids == (ADMIN, OUTSIDER)
    assert is_admin(updated, OUTSIDER)
    # the original snapshot is untouched
    assert not is_admin(game_set, OUTSIDER)


def test_outsider_cannot_grant(game_set: GameSetModel) -> None:
    with pytest.raises(NotAuthorizedError):
        grant_admin(game_set, OUTSIDER, OUTSIDER)


@pytest.mark.parametrize("target", [CREATOR, ADMIN])
def test_grant_existing_admin(game_set: GameSetModel, target: UUID) -> None:
    with pytest.raises(AlreadyAdminError):
        grant_admin(game_set, CREATOR, target)


# -- revoke_admin --
def test_creator_revokes_admin(game_set: GameSetModel) -> None:
    updated = revoke_admin(game_set, CREATOR, ADMIN)
    assert updated.admin_ids == ()
    assert not is_admin(updated, ADMIN)


@pytest.mark.parametrize("target", [CREATOR, ADMIN, OUTSIDER, uuid4()])
@pytest.mark.parametrize("requested_by", [ADMIN, OUTSIDER])
def test_only_creator_can_revoke(
    game_set: GameSetModel, requested_by: UUID, target: UUID
) -> None:
    with pytest.raises(NotAuthorizedError):
        revoke_admin(game_set, requested_by, target)


def test_creator_cannot_be_revoked(game_set: GameSetModel) -> None:
    with pytest.raises(CannotRemoveCreatorError):
        revoke_admin(game_set, CREATOR, CREATOR)


def test_creator_cannot_be_revoked_even_if_stored(game_set: GameSetModel) -> None:
    """Older sets stored the creator among the admins."""
    legacy = GameSetModel(
        game_set_id=game_set.game_set_id,
        name=game_set.name,
        created_at=game_set.created_at,
        creator_id=CREATOR,
        admin_ids=(CREATOR, ADMIN),
    )
    with pytest.raises(CannotRemoveCreatorError):
        revoke_admin(legacy, CREATOR, CREATOR)


def test_revoke_non_admin(game_set: GameSetModel) -> None:
    with pytest.raises(NotAnAdminError):
        revoke_admin(game_set, CREATOR, OUTSIDER)
