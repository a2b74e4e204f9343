from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class RemoveFromWaitingListUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, entry_id: int) -> None:
        async with self.uow:
            if not await self.uow.waiting_list.get_by_id(entry_id=entry_id):
                raise NotFoundError('Waiting list entry not found')
            await self.uow.waiting_list.delete(entry_id=entry_id)
            await self.uow.commit()
