from uuid import UUID, uuid4

import pytest

from src.api.models import (
    AddAdminRequest,
    CreateGameSetRequest,
    CreatePlayerRequest,
    SaveRoundRequest,
)
from src.core.exceptions import InvalidRequestError
from src.scoring.draft import DraftScore


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreatePlayerRequest / CreateGameSetRequest --
def test_valid_player_name() -> None:
    assert CreatePlayerRequest(name=" Kaja ").name == " Kaja "


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_player_name(name: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreatePlayerRequest(name=name)


def test_blank_game_set_name(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameSetRequest(name=" ", creator_id=mock_id, player_ids=[])


# -- Validation - SaveRoundRequest --
def test_save_round_request_to_draft(mock_id: UUID) -> None:
    """Out-of-range scores pass the request model; the ledger reports them with a precise error."""
    player_1, player_2 = uuid4(), uuid4()
    request = SaveRoundRequest(
        actor_id=mock_id,
        round_number=3,
        scores=[
            {"player_id": player_1, "score": 12},
            {"player_id": player_2, "score": 99},
        ],
    )
    assert request.to_draft().scores == (
        DraftScore(player_1, 12),
        DraftScore(player_2, 99),
    )


@pytest.mark.parametrize("round_number", [0, -1])
def test_round_numbers_start_at_one(mock_id: UUID, round_number: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SaveRoundRequest(actor_id=mock_id, round_number=round_number, scores=[])


# -- Validation - AddAdminRequest --
def test_valid_email(mock_id: UUID) -> None:
    request = AddAdminRequest(requested_by=mock_id, email=" u2@example.com ")
    assert request.email == "u2@example.com"


@pytest.mark.parametrize(
    "email",
    [
        "nonsense",  # no @ at all
        "@example.com",  # nothing before the @
        "u2@",  # nothing after the @
    ],
)
def test_invalid_email(mock_id: UUID, email: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = AddAdminRequest(requested_by=mock_id, email=email)
