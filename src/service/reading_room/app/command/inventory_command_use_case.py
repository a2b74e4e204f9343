from typing import Any, Dict, List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.action_log_recorder import ActionLogRecorder
from src.service.reading_room.domain.entity.inventory_entity import InventoryItem
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.log_action import LogAction


ENTITY = 'Inventory'


class InventoryCommandUseCase:
    """Managers only touch equipment at their own locations, admins anywhere"""

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow
        self.audit = ActionLogRecorder(uow)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    async def _ensure_location(self, actor: UserEntity, location_id: int) -> None:
        actor.ensure_location(location_id)
        if not await self.uow.locations.get_by_id(location_id=location_id):
            raise NotFoundError('Location not found')

    @Logger.io
    async def create_many(
        self, *, actor: UserEntity, items: List[Dict[str, Any]]
    ) -> List[InventoryItem]:
        """One item or a bulk import, all or nothing"""
        entities = [InventoryItem.create(**fields) for fields in items]
        bulk = len(entities) > 1

        async with self.uow:
            for location_id in sorted({item.location_id for item in entities}):
                await self._ensure_location(actor, location_id)

            created = await self.uow.inventory.create_many(items=entities)
            for item in created:
                await self.audit.record(
                    action=LogAction.CREATE,
                    entity=ENTITY,
                    entity_id=item.id,
                    details=f'{"Bulk created" if bulk else "Created"} inventory: {item.describe()}',
                    performed_by=actor.email,
                )
            await self.uow.commit()

        Logger.base.info(f'📦 [INVENTORY] {actor.email} added {len(created)} items')
        return created

    @Logger.io
    async def update(self, *, actor: UserEntity, item_id: int, **changes) -> InventoryItem:
        async with self.uow:
            item = await self.uow.inventory.get_by_id(item_id=item_id)
            if not item:
                raise NotFoundError('Inventory item not found')
            actor.ensure_location(item.location_id)
            if changes.get('location_id') not in (None, item.location_id):
                await self._ensure_location(actor, changes['location_id'])

            item = await self.uow.inventory.update(item=item.update(**changes))
            await self.audit.record(
                action=LogAction.UPDATE,
                entity=ENTITY,
                entity_id=item.id,
                details=f'Updated inventory: {item.describe()}',
                performed_by=actor.email,
            )
            await self.uow.commit()

        return item

    @Logger.io
    async def delete(self, *, actor: UserEntity, item_id: int) -> None:
        async with self.uow:
            item = await self.uow.inventory.get_by_id(item_id=item_id)
            if not item:
                raise NotFoundError('Inventory item not found')
            actor.ensure_location(item.location_id)

            await self.uow.inventory.delete(item_id=item_id)
            await self.audit.record(
                action=LogAction.DELETE,
                entity=ENTITY,
                entity_id=item_id,
                details=f'Deleted inventory: {item.describe()}',
                performed_by=actor.email,
            )
            await self.uow.commit()
