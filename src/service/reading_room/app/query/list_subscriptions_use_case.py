from typing import Any, Dict, List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class ListSubscriptionsUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_all(self) -> List[Dict[str, Any]]:
        async with self.uow:
            return await self.uow.subscriptions.list_with_details()

    @Logger.io
    async def list_for_member(self, *, member_id: int) -> List[Dict[str, Any]]:
        async with self.uow:
            if not await self.uow.members.get_by_id(member_id=member_id):
                raise NotFoundError('Member not found')
            return await self.uow.subscriptions.list_with_details(member_id=member_id)
