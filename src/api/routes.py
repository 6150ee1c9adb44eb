"""HTTP routes. Each one is a thin async wrapper around a SessionService call.

The service and the SQLAlchemy session below it are synchronous, so every call is handed to the
threadpool and the event loop stays free for other requests.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from src.api.models import (
    AddAdminRequest,
    AddPlayerToSetRequest,
    AdminResponse,
    CreateGameSetRequest,
    CreatePlayerRequest,
    DraftResponse,
    GameSetResponse,
    PlayerResponse,
    RoundResponse,
    SaveRoundRequest,
    SetResponse,
)
from src.db.database import get_db
from src.db.sql_repository import (
    SQLGameSetRepository,
    SQLIdentityResolver,
    SQLPlayerRepository,
    SQLScoreRepository,
)
from src.services.session_service import SessionService

router = APIRouter()


def get_session_service(db: Session = Depends(get_db)) -> SessionService:
    return SessionService(
        players=SQLPlayerRepository(db),
        game_sets=SQLGameSetRepository(db),
        scores=SQLScoreRepository(db),
        identity=SQLIdentityResolver(db),
    )


# --- Players ---
@router.get("/players", response_model=list[PlayerResponse])
async def list_players(service: SessionService = Depends(get_session_service)):
    players = await run_in_threadpool(service.list_players)
    return [PlayerResponse.from_model(p) for p in players]


@router.post("/players", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
async def create_player(
    request: CreatePlayerRequest, service: SessionService = Depends(get_session_service)
):
    return PlayerResponse.from_model(
        await run_in_threadpool(service.create_player, request.name)
    )


# --- Game sets ---
@router.get("/game-sets", response_model=list[GameSetResponse])
async def list_game_sets(service: SessionService = Depends(get_session_service)):
    game_sets = await run_in_threadpool(service.list_sets)
    return [GameSetResponse.from_model(s) for s in game_sets]


@router.post("/game-sets", response_model=GameSetResponse, status_code=status.HTTP_201_CREATED)
async def create_game_set(
    request: CreateGameSetRequest, service: SessionService = Depends(get_session_service)
):
    game_set = await run_in_threadpool(
        service.create_set, request.name, request.creator_id, request.player_ids
    )
    return GameSetResponse.from_model(game_set)


@router.get("/game-sets/{game_set_id}", response_model=SetResponse)
async def load_game_set(
    game_set_id: UUID,
    viewer_id: UUID,
    service: SessionService = Depends(get_session_service),
):
    snapshot = await run_in_threadpool(service.load_set, game_set_id, viewer_id)
    return SetResponse.from_snapshot(snapshot)


@router.delete("/game-sets/{game_set_id}", response_model=GameSetResponse)
async def delete_game_set(
    game_set_id: UUID,
    requested_by: UUID,
    service: SessionService = Depends(get_session_service),
):
    deleted = await run_in_threadpool(service.delete_set, game_set_id, requested_by)
    return GameSetResponse.from_model(deleted)


@router.post("/game-sets/{game_set_id}/players", response_model=GameSetResponse)
async def add_player_to_game_set(
    game_set_id: UUID,
    request: AddPlayerToSetRequest,
    service: SessionService = Depends(get_session_service),
):
    game_set = await run_in_threadpool(
        service.add_player_to_set, game_set_id, request.requested_by, request.player_id
    )
    return GameSetResponse.from_model(game_set)


# --- Rounds ---
@router.get("/game-sets/{game_set_id}/draft", response_model=DraftResponse)
async def round_draft(
    game_set_id: UUID,
    viewer_id: UUID,
    service: SessionService = Depends(get_session_service),
):
    snapshot = await run_in_threadpool(service.load_set, game_set_id, viewer_id)
    draft = service.prepare_round_draft(snapshot.roster)
    return DraftResponse.from_draft(snapshot.next_round, draft)


@router.post(
    "/game-sets/{game_set_id}/rounds",
    response_model=RoundResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_round(
    game_set_id: UUID,
    request: SaveRoundRequest,
    service: SessionService = Depends(get_session_service),
):
    result = await run_in_threadpool(
        service.save_round,
        game_set_id,
        request.round_number,
        request.to_draft(),
        request.actor_id,
    )
    return RoundResponse.from_result(result)


# --- Admins ---
@router.get("/game-sets/{game_set_id}/admins", response_model=list[AdminResponse])
async def list_admins(
    game_set_id: UUID, service: SessionService = Depends(get_session_service)
):
    admins = await run_in_threadpool(service.list_admins, game_set_id)
    return [AdminResponse.from_model(u) for u in admins]


@router.post("/game-sets/{game_set_id}/admins", response_model=GameSetResponse)
async def add_admin(
    game_set_id: UUID,
    request: AddAdminRequest,
    service: SessionService = Depends(get_session_service),
):
    game_set = await run_in_threadpool(
        service.add_admin, game_set_id, request.requested_by, request.email
    )
    return GameSetResponse.from_model(game_set)


@router.delete("/game-sets/{game_set_id}/admins/{user_id}", response_model=GameSetResponse)
async def remove_admin(
    game_set_id: UUID,
    user_id: UUID,
    requested_by: UUID,
    service: SessionService = Depends(get_session_service),
):
    game_set = await run_in_threadpool(
        service.remove_admin, game_set_id, requested_by, user_id
    )
    return GameSetResponse.from_model(game_set)
