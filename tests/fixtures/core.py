from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, create_engine

from src.storefront.core.services import AccessTokenService, DbSessionService
from src.storefront.runtime.config.config_data import ConfigData
from src.storefront.runtime.context import get_config


@pytest.fixture
def config() -> ConfigData:
    return get_config()


@pytest.fixture
def engine() -> Generator[Engine]:
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db_service(engine: Engine) -> DbSessionService:
    service = DbSessionService(engine=engine)
    service.create_all()
    return service


@pytest.fixture
def session(db_service: DbSessionService) -> Generator[Session]:
    with db_service.get_session() as session:
        yield session


@pytest.fixture
def token_service(config: ConfigData) -> AccessTokenService:
    return AccessTokenService(config.auth)


@pytest.fixture
def admin_token(token_service: AccessTokenService, config: ConfigData) -> str:
    return token_service.issue(
        "admin-1", role=config.auth.admin_role, email="admin@example.com"
    )


@pytest.fixture
def user_token(token_service: AccessTokenService) -> str:
    return token_service.issue("user-1", role="USER", email="user@example.com")


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_token}"}
