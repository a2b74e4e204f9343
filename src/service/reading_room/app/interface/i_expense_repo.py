from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.reading_room.domain.entity.expense_entity import Expense


class IExpenseRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, expense_id: int) -> Expense | None:
        pass

    @abstractmethod
    async def list_by_locations(
        self, *, location_ids: Optional[List[int]] = None
    ) -> List[Expense]:
        """Most recent spend first"""
        pass

    @abstractmethod
    async def create(self, *, expense: Expense) -> Expense:
        pass

    @abstractmethod
    async def update(self, *, expense: Expense) -> Expense:
        pass

    @abstractmethod
    async def delete(self, *, expense_id: int) -> None:
        pass
