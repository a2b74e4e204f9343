from abc import ABC, abstractmethod
from typing import List

from src.service.reading_room.domain.entity.payment_entity import Payment


class IPaymentRepo(ABC):
    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def list_by_member(self, *, member_id: int) -> List[Payment]:
        """Every payment on the member's subscriptions, newest first"""
        pass
