from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_password_hasher import IPasswordHasher
from src.service.reading_room.app.service.action_log_recorder import ActionLogRecorder
from src.service.reading_room.domain.entity.action_log_entity import SYSTEM_ACTOR
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.log_action import LogAction
from src.service.reading_room.domain.enum.user_role import UserRole


class UserCommandUseCase:
    def __init__(self, uow: AbstractUnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(uow=uow, password_hasher=password_hasher)

    @Logger.io
    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: str,
        location_ids: Optional[List[int]] = None,
        performed_by: str = SYSTEM_ACTOR,
    ) -> UserEntity:
        user_role = UserEntity.validate_role(role)
        if len(password) < 8:
            raise DomainError('Password must be at least 8 characters')

        user_entity = UserEntity(
            email=email.strip().lower(),
            name=name,
            role=user_role,
            location_ids=sorted(set(location_ids or [])),
        )
        user_entity.set_password(password, self.password_hasher)

        async with self.uow:
            if await self.uow.users.get_by_email(email=user_entity.email):
                raise ConflictError('Email already registered')
            for location_id in user_entity.location_ids:
                if not await self.uow.locations.get_by_id(location_id=location_id):
                    raise DomainError(f'Unknown location: {location_id}')
            created_user = await self.uow.users.create(user_entity=user_entity)
            await ActionLogRecorder(self.uow).record(
                action=LogAction.CREATE,
                entity='User',
                entity_id=created_user.id,
                details=f'Created user: {created_user.email} ({created_user.role.value})',
                performed_by=performed_by,
            )
            await self.uow.commit()

        return created_user

    @Logger.io
    async def seed_admin(self, *, email: str, password: str, name: str) -> Optional[UserEntity]:
        """Create the first Admin when the user table is empty"""
        async with self.uow:
            if await self.uow.users.count():
                return None

        user = await self.create_user(
            email=email, password=password, name=name, role=UserRole.ADMIN.value
        )
        Logger.base.info(f'🔑 [USER] Seeded initial admin {user.email}')
        return user
