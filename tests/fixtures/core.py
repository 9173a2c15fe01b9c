from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from src.bookstore.core.services.database import DbManageService, DbSessionService
from src.bookstore.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    JWTConfig,
    LoggingConfig,
    SecurityConfig,
    SeedUserConfig,
)
from src.bookstore.runtime.context import get_config, set_config

TEST_SIGNING_KEY = "test-signing-key-0123456789abcdef0123456789abcdef"
ADMIN_EMAIL = "admin@bookstore.com"
ADMIN_PASSWORD = "Admin1"


@pytest.fixture
def test_config() -> ConfigData:
    """Configuration for an isolated in-memory store."""
    return ConfigData(
        app=AppConfig(environment="test"),
        database=DatabaseConfig(url="sqlite://"),
        jwt=JWTConfig(signing_key=TEST_SIGNING_KEY),
        logging=LoggingConfig(level="DEBUG", format="plain", file=None),
        security=SecurityConfig(
            seed_users=[
                SeedUserConfig(
                    email=ADMIN_EMAIL,
                    password=ADMIN_PASSWORD,
                    roles=["Administrator"],
                )
            ]
        ),
    )


@pytest.fixture
def active_config(test_config: ConfigData) -> Generator[ConfigData]:
    """Install the test configuration process-wide, restoring the previous one."""
    previous = get_config()
    set_config(test_config)
    try:
        yield test_config
    finally:
        set_config(previous)


@pytest.fixture
def db_service(active_config: ConfigData) -> Generator[DbSessionService]:
    """Fresh in-memory database with tables and roles created."""
    service = DbSessionService(active_config)
    manage = DbManageService(service)
    manage.create_all()
    manage.seed_roles()
    try:
        yield service
    finally:
        service.dispose()


@pytest.fixture
def session(db_service: DbSessionService) -> Generator[Session]:
    """Create a fresh database session for testing."""
    session = db_service.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(active_config: ConfigData) -> Generator[TestClient]:
    """Test client running the full application lifespan on its own database."""
    from src.bookstore.api.http.app import create_app

    with TestClient(create_app()) as client:
        yield client
