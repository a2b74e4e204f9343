from typing import Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.action_log_recorder import ActionLogRecorder
from src.service.reading_room.domain.entity.fee_type_entity import DUPLICATE_FEE_NAME, FeeType
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.log_action import LogAction


ENTITY = 'FeeType'


class FeeTypeCommandUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow
        self.audit = ActionLogRecorder(uow)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    async def _ensure_name_free(self, name: str, *, fee_type_id: Optional[int] = None) -> None:
        other = await self.uow.fee_types.get_by_name(name=name)
        if other and other.id != fee_type_id:
            raise ConflictError(DUPLICATE_FEE_NAME)

    @Logger.io
    async def create(self, *, actor: UserEntity, name: str, amount: int, duration: str) -> FeeType:
        fee_type = FeeType.create(name=name, amount=amount, duration=duration)
        async with self.uow:
            await self._ensure_name_free(fee_type.name)
            fee_type = await self.uow.fee_types.create(fee_type=fee_type)
            await self.audit.record(
                action=LogAction.CREATE,
                entity=ENTITY,
                entity_id=fee_type.id,
                details=f'Created fee: {fee_type.name} ({fee_type.amount} for {fee_type.duration})',
                performed_by=actor.email,
            )
            await self.uow.commit()

        return fee_type

    @Logger.io
    async def update(
        self,
        *,
        actor: UserEntity,
        fee_type_id: int,
        name: Optional[str] = None,
        amount: Optional[int] = None,
        duration: Optional[str] = None,
    ) -> FeeType:
        async with self.uow:
            fee_type = await self.uow.fee_types.get_by_id(fee_type_id=fee_type_id)
            if not fee_type:
                raise NotFoundError('Fee type not found')

            fee_type = fee_type.update(name=name, amount=amount, duration=duration)
            await self._ensure_name_free(fee_type.name, fee_type_id=fee_type_id)
            fee_type = await self.uow.fee_types.update(fee_type=fee_type)
            await self.audit.record(
                action=LogAction.UPDATE,
                entity=ENTITY,
                entity_id=fee_type.id,
                details=f'Updated fee: {fee_type.name} ({fee_type.amount} for {fee_type.duration})',
                performed_by=actor.email,
            )
            await self.uow.commit()

        return fee_type

    @Logger.io
    async def delete(self, *, actor: UserEntity, fee_type_id: int) -> None:
        async with self.uow:
            fee_type = await self.uow.fee_types.get_by_id(fee_type_id=fee_type_id)
            if not fee_type:
                raise NotFoundError('Fee type not found')

            await self.uow.fee_types.delete(fee_type_id=fee_type_id)
            await self.audit.record(
                action=LogAction.DELETE,
                entity=ENTITY,
                entity_id=fee_type_id,
                details=f'Deleted fee: {fee_type.name}',
                performed_by=actor.email,
            )
            await self.uow.commit()
