from typing import List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.inventory_entity import InventoryItem
from src.service.reading_room.domain.entity.user_entity import UserEntity


class InventoryQueryUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_items(self, *, actor: UserEntity) -> List[InventoryItem]:
        async with self.uow:
            return await self.uow.inventory.list_by_locations(location_ids=actor.location_scope)

    @Logger.io
    async def get_item(self, *, actor: UserEntity, item_id: int) -> InventoryItem:
        async with self.uow:
            item = await self.uow.inventory.get_by_id(item_id=item_id)
        if not item:
            raise NotFoundError('Inventory item not found')
        actor.ensure_location(item.location_id)
        return item
