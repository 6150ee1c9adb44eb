"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.api.app import create_app
from src.core.models import GameSetModel, PlayerModel
from src.db.database import get_db
from src.db.schema import Base, DBUser
from src.db.sql_repository import (
    SQLGameSetRepository,
    SQLIdentityResolver,
    SQLPlayerRepository,
    SQLScoreRepository,
)
from src.services.session_service import SessionService

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


# --- Repositories / services on top of the test database ---
@pytest.fixture
def player_repo(db_session_repo: Session) -> SQLPlayerRepository:
    return SQLPlayerRepository(db_session_repo)


@pytest.fixture
def game_set_repo(db_session_repo: Session) -> SQLGameSetRepository:
    return SQLGameSetRepository(db_session_repo)


@pytest.fixture
def score_repo(db_session_repo: Session) -> SQLScoreRepository:
    return SQLScoreRepository(db_session_repo)


@pytest.fixture
def identity(db_session_repo: Session) -> SQLIdentityResolver:
    return SQLIdentityResolver(db_session_repo)


@pytest.fixture
def service(
    player_repo: SQLPlayerRepository,
    game_set_repo: SQLGameSetRepository,
    score_repo: SQLScoreRepository,
    identity: SQLIdentityResolver,
) -> SessionService:
    return SessionService(player_repo, game_set_repo, score_repo, identity)


# --- Seed data ---
@pytest.fixture
def users(db_session_repo: Session) -> dict[str, UUID]:
    """Three users known to the identity provider: u1, u2 and u3 (emails <name>@example.com)."""
    ids = {name: uuid4() for name in ("u1", "u2", "u3")}
    db_session_repo.add_all(
        DBUser(id=user_id, email=f"{name}@example.com", display_name=name.upper())
        for name, user_id in ids.items()
    )
    db_session_repo.commit()
    return ids


@pytest.fixture
def alice(service: SessionService) -> PlayerModel:
    return service.create_player("Alice")


@pytest.fixture
def bob(service: SessionService) -> PlayerModel:
    return service.create_player("Bob")


@pytest.fixture
def game_set(
    service: SessionService,
    users: dict[str, UUID],
    alice: PlayerModel,
    bob: PlayerModel,
) -> GameSetModel:
    """A set created by u1 with roster [Alice, Bob]."""
    return service.create_set("Saaremaa", users["u1"], [alice.player_id, bob.player_id])


# --- API ---
@pytest.fixture
def client(db_session_repo: Session) -> Generator[TestClient, None, None]:
    app = create_app(create_tables=False)

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session_repo

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
