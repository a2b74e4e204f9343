from typing import List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.expense_entity import Expense
from src.service.reading_room.domain.entity.user_entity import UserEntity


class ExpenseQueryUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_expenses(self, *, actor: UserEntity) -> List[Expense]:
        async with self.uow:
            return await self.uow.expenses.list_by_locations(location_ids=actor.location_scope)
