from sqlalchemy import delete, func, select

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_user_repo import IUserRepo
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.user_role import UserRole
from src.service.reading_room.driven_adapter.model.user_model import UserModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class UserRepoImpl(SessionRepo, IUserRepo):
    @staticmethod
    def _to_entity(user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            name=user_model.name,
            hashed_password=user_model.hashed_password,
            role=UserRole(user_model.role),
            location_ids=list(user_model.location_ids or []),
            is_active=user_model.is_active,
            created_at=user_model.created_at,
        )

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        async with self._get_session() as session:
            user_model = await session.get(UserModel, user_id)
            return self._to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_email(self, *, email: str) -> UserEntity | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.email == email.strip().lower())
            )
            user_model = result.scalar_one_or_none()
            return self._to_entity(user_model) if user_model else None

    @Logger.io
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        async with self._get_session() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
                location_ids=list(user_entity.location_ids),
                is_active=user_entity.is_active,
            )
            session.add(user_model)
            await session.flush()
            await session.refresh(user_model)
            return self._to_entity(user_model)

    @Logger.io
    async def count(self) -> int:
        async with self._get_session() as session:
            result = await session.execute(select(func.count()).select_from(UserModel))
            return int(result.scalar_one())

    @Logger.io
    async def delete(self, *, user_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(UserModel).where(UserModel.id == user_id))
