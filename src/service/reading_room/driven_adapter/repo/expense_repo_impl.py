from typing import List, Optional

from sqlalchemy import delete, select

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_expense_repo import IExpenseRepo
from src.service.reading_room.domain.entity.expense_entity import Expense
from src.service.reading_room.domain.enum.expense_enums import ExpenseCategory, ExpenseMethod
from src.service.reading_room.driven_adapter.model.expense_model import ExpenseModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class ExpenseRepoImpl(SessionRepo, IExpenseRepo):
    @staticmethod
    def _to_entity(model: ExpenseModel) -> Expense:
        return Expense(
            id=model.id,
            description=model.description,
            amount=model.amount,
            category=ExpenseCategory(model.category),
            method=ExpenseMethod(model.method),
            paid_to=model.paid_to,
            location_id=model.location_id,
            spent_on=model.spent_on,
            created_at=model.created_at,
        )

    @staticmethod
    def _apply(model: ExpenseModel, expense: Expense) -> None:
        model.description = expense.description
        model.amount = expense.amount
        model.category = expense.category.value
        model.method = expense.method.value
        model.paid_to = expense.paid_to
        model.location_id = expense.location_id
        model.spent_on = expense.spent_on

    @Logger.io
    async def get_by_id(self, *, expense_id: int) -> Expense | None:
        async with self._get_session() as session:
            model = await session.get(ExpenseModel, expense_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_by_locations(
        self, *, location_ids: Optional[List[int]] = None
    ) -> List[Expense]:
        async with self._get_session() as session:
            stmt = select(ExpenseModel).order_by(
                ExpenseModel.spent_on.desc(), ExpenseModel.id.desc()
            )
            if location_ids is not None:
                stmt = stmt.where(ExpenseModel.location_id.in_(location_ids))
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def create(self, *, expense: Expense) -> Expense:
        async with self._get_session() as session:
            model = ExpenseModel()
            self._apply(model, expense)
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def update(self, *, expense: Expense) -> Expense:
        async with self._get_session() as session:
            model = await session.get(ExpenseModel, expense.id)
            if model is None:
                raise NotFoundError('Expense not found')
            self._apply(model, expense)
            await session.flush()
            return self._to_entity(model)

    @Logger.io
    async def delete(self, *, expense_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(ExpenseModel).where(ExpenseModel.id == expense_id))
