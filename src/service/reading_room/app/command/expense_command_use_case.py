from datetime import datetime
from typing import Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.action_log_recorder import ActionLogRecorder
from src.service.reading_room.domain.entity.expense_entity import Expense
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.log_action import LogAction


ENTITY = 'Expense'


class ExpenseCommandUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow
        self.audit = ActionLogRecorder(uow)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def create(
        self,
        *,
        actor: UserEntity,
        description: str,
        amount: int,
        category: str,
        method: str,
        location_id: Optional[int],
        spent_on: Optional[datetime] = None,
        paid_to: Optional[str] = None,
    ) -> Expense:
        expense = Expense.create(
            description=description,
            amount=amount,
            category=category,
            method=method,
            location_id=location_id,
            spent_on=spent_on,
            paid_to=paid_to,
        )
        actor.ensure_location(expense.location_id)

        async with self.uow:
            if not await self.uow.locations.get_by_id(location_id=expense.location_id):
                raise NotFoundError('Location not found')
            expense = await self.uow.expenses.create(expense=expense)
            await self.audit.record(
                action=LogAction.CREATE,
                entity=ENTITY,
                entity_id=expense.id,
                details=f'Recorded expense: {expense.description} ({expense.amount})',
                performed_by=actor.email,
            )
            await self.uow.commit()

        return expense

    @Logger.io
    async def update(self, *, actor: UserEntity, expense_id: int, **changes) -> Expense:
        async with self.uow:
            expense = await self.uow.expenses.get_by_id(expense_id=expense_id)
            if not expense:
                raise NotFoundError('Expense not found')
            actor.ensure_location(expense.location_id)
            new_location = changes.get('location_id')
            if new_location not in (None, expense.location_id):
                actor.ensure_location(new_location)
                if not await self.uow.locations.get_by_id(location_id=new_location):
                    raise NotFoundError('Location not found')

            expense = await self.uow.expenses.update(expense=expense.update(**changes))
            await self.audit.record(
                action=LogAction.UPDATE,
                entity=ENTITY,
                entity_id=expense.id,
                details=f'Updated expense: {expense.description} ({expense.amount})',
                performed_by=actor.email,
            )
            await self.uow.commit()

        return expense

    @Logger.io
    async def delete(self, *, actor: UserEntity, expense_id: int) -> None:
        async with self.uow:
            expense = await self.uow.expenses.get_by_id(expense_id=expense_id)
            if not expense:
                raise NotFoundError('Expense not found')
            actor.ensure_location(expense.location_id)

            await self.uow.expenses.delete(expense_id=expense_id)
            await self.audit.record(
                action=LogAction.DELETE,
                entity=ENTITY,
                entity_id=expense_id,
                details=f'Deleted expense: {expense.description} ({expense.amount})',
                performed_by=actor.email,
            )
            await self.uow.commit()
