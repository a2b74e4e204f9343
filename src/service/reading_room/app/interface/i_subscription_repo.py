from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List

from uuid_utils import UUID

from src.service.reading_room.domain.entity.subscription_entity import Subscription


class ISubscriptionRepo(ABC):
    @abstractmethod
    async def get_by_id(
        self, *, subscription_id: UUID, for_update: bool = False
    ) -> Subscription | None:
        """
        Args:
            subscription_id: Subscription ID
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            Subscription entity or None if not found
        """
        pass

    @abstractmethod
    async def create(self, *, subscription: Subscription) -> Subscription:
        pass

    @abstractmethod
    async def update(self, *, subscription: Subscription) -> Subscription:
        pass

    @abstractmethod
    async def list_lapsed_ids(self, *, now: datetime) -> List[UUID]:
        """Ids of active subscriptions whose end date is before now"""
        pass

    @abstractmethod
    async def list_active_ids(self, *, subscription_ids: List[UUID]) -> set[UUID]:
        pass

    @abstractmethod
    async def list_with_details(self, *, member_id: int | None = None) -> List[Dict[str, Any]]:
        """Newest first, with member name/email, seat number and payments"""
        pass
