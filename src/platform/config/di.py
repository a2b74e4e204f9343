"""
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html

Only the login path and the role checks come from here. Use cases that write get
their unit of work from FastAPI's Depends(get_unit_of_work).
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.service.reading_room.driven_adapter.repo.user_repo_impl import UserRepoImpl
from src.service.reading_room.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.reading_room.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    database = providers.Singleton(Database)

    # Reads outside a unit of work, one session per call
    user_repo = providers.Singleton(UserRepoImpl, session_factory=database.provided.session)

    password_hasher = providers.Singleton(BcryptPasswordHasher, rounds=settings.BCRYPT_ROUNDS)
    jwt_auth = providers.Singleton(
        JwtAuth,
        secret=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_days=settings.ACCESS_TOKEN_EXPIRE_DAYS,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
