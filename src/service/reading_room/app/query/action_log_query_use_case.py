from typing import List, Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.action_log_entity import ActionLog


class ActionLogQueryUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_recent(
        self, *, entity: Optional[str] = None, limit: int = 100
    ) -> List[ActionLog]:
        async with self.uow:
            return await self.uow.action_logs.list_recent(entity=entity, limit=limit)
