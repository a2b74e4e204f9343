"""
API test configuration.

The app is built by create_app with a lifespan that touches no database. Every
request gets a FakeUnitOfWork over one shared InMemoryStore, and the container's
user repository reads the same store, so login and the use cases see the same users.
"""

from collections.abc import AsyncIterator, Callable, Generator
from contextlib import asynccontextmanager

from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.unit_of_work import get_unit_of_work
from src.service.reading_room.domain.entity import UserEntity
from src.service.reading_room.domain.enum.user_role import UserRole
from src.service.reading_room.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from test.service.reading_room.fakes import FakeUnitOfWork, InMemoryStore, InMemoryUserRepo


DEFAULT_PASSWORD = 'P@ssw0rd'


@asynccontextmanager
async def _noop_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(store: InMemoryStore) -> Generator[TestClient, None, None]:
    app = create_app(lifespan=_noop_lifespan, title_suffix=' (Test)')
    app.dependency_overrides[get_unit_of_work] = lambda: FakeUnitOfWork(store)

    container.user_repo.override(providers.Object(InMemoryUserRepo(store)))
    container.wire(modules=WIRE_MODULES)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.unwire()
        container.user_repo.reset_override()


@pytest.fixture
def create_user(store: InMemoryStore) -> Callable[..., UserEntity]:
    hasher = BcryptPasswordHasher(rounds=4)

    def _create(
        *, email: str, role: UserRole, location_ids: list[int] | None = None
    ) -> UserEntity:
        user = UserEntity(
            email=email, name=email.split('@')[0], role=role, location_ids=location_ids or []
        )
        user.set_password(DEFAULT_PASSWORD, hasher)
        user_id = store.next_id('users')
        user.id = user_id
        store.users[user_id] = user
        return user

    return _create


@pytest.fixture
def login(client: TestClient, create_user: Callable[..., UserEntity]) -> Callable[..., UserEntity]:
    """Create a user and log the client in as that user"""

    def _login(*, email: str, role: UserRole, location_ids: list[int] | None = None) -> UserEntity:
        user = create_user(email=email, role=role, location_ids=location_ids)
        client.cookies.clear()
        response = client.post(
            '/api/user/login', json={'email': email, 'password': DEFAULT_PASSWORD}
        )
        assert response.status_code == 200, response.text
        return user

    return _login
