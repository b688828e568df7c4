"""Shared pytest fixtures.

Fixtures here are deliberately small:
- ``settings``: testing Settings (fast bcrypt, no Redis)
- ``database``: SQLite (aiosqlite) Database with all tables created,
  one file per test under ``tmp_path``
- ``fake_redis``: in-process Redis (fakeredis)
- ``mock_logger``: MagicMock standing in for LoggerProtocol
- ``make_user``: domain User factory
"""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
import fakeredis.aioredis
from uuid_extensions import uuid7

from warden.core.config import Settings
from warden.core.enums import Environment
from warden.domain.entities import Profile, User
from warden.domain.enums import UserRole, UserType
from warden.domain.services import roles_for_type
from warden.infrastructure.persistence import Database

TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests with mocked collaborators")
    config.addinivalue_line("markers", "integration: tests against real adapters")
    config.addinivalue_line("markers", "api: GraphQL API tests through the ASGI app")


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Testing settings: SQLite database, bcrypt cost 4, throttling off."""
    return Settings(
        environment=Environment.TESTING,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'warden.db'}",
        secret_key=TEST_SECRET_KEY,
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        log_level="WARNING",
        _env_file=None,
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Fresh SQLite database with every table created."""
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def fake_redis() -> AsyncGenerator[fakeredis.aioredis.FakeRedis, None]:
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for domain users with policy roles by default."""

    def _make(
        email: str = "test@example.com",
        user_type: UserType = UserType.USER,
        roles: frozenset[UserRole] | None = None,
        password_hash: str | None = None,
        profile: Profile | None = None,
    ) -> User:
        return User(
            id=uuid7(),
            email=email,
            user_type=user_type,
            roles=roles if roles is not None else roles_for_type(user_type),
            profile=profile,
            password_hash=password_hash,
        )

    return _make
