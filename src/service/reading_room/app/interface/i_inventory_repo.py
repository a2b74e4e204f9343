from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.reading_room.domain.entity.inventory_entity import InventoryItem


class IInventoryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, item_id: int) -> InventoryItem | None:
        pass

    @abstractmethod
    async def list_by_locations(
        self, *, location_ids: Optional[List[int]] = None
    ) -> List[InventoryItem]:
        """Newest first, location_ids=None lists every location"""
        pass

    @abstractmethod
    async def create_many(self, *, items: List[InventoryItem]) -> List[InventoryItem]:
        pass

    @abstractmethod
    async def update(self, *, item: InventoryItem) -> InventoryItem:
        pass

    @abstractmethod
    async def delete(self, *, item_id: int) -> None:
        pass
