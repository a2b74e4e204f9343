from typing import List, Optional

from sqlalchemy import delete, select

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_inventory_repo import IInventoryRepo
from src.service.reading_room.domain.entity.inventory_entity import InventoryItem
from src.service.reading_room.domain.enum.inventory_enums import InventoryCategory, InventoryStatus
from src.service.reading_room.driven_adapter.model.inventory_model import InventoryModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


_COLUMNS = (
    'name',
    'location_id',
    'quantity',
    'amount',
    'purchase_date',
    'last_maintenance_date',
    'notes',
    'serial_number',
    'brand',
    'model',
)


class InventoryRepoImpl(SessionRepo, IInventoryRepo):
    @staticmethod
    def _to_entity(model: InventoryModel) -> InventoryItem:
        return InventoryItem(
            id=model.id,
            category=InventoryCategory(model.category),
            status=InventoryStatus(model.status),
            created_at=model.created_at,
            **{column: getattr(model, column) for column in _COLUMNS},
        )

    @staticmethod
    def _apply(model: InventoryModel, item: InventoryItem) -> None:
        for column in _COLUMNS:
            setattr(model, column, getattr(item, column))
        model.category = item.category.value
        model.status = item.status.value

    @Logger.io
    async def get_by_id(self, *, item_id: int) -> InventoryItem | None:
        async with self._get_session() as session:
            model = await session.get(InventoryModel, item_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_by_locations(
        self, *, location_ids: Optional[List[int]] = None
    ) -> List[InventoryItem]:
        async with self._get_session() as session:
            stmt = select(InventoryModel).order_by(
                InventoryModel.created_at.desc(), InventoryModel.id.desc()
            )
            if location_ids is not None:
                stmt = stmt.where(InventoryModel.location_id.in_(location_ids))
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def create_many(self, *, items: List[InventoryItem]) -> List[InventoryItem]:
        async with self._get_session() as session:
            models = []
            for item in items:
                model = InventoryModel()
                self._apply(model, item)
                models.append(model)
            session.add_all(models)
            await session.flush()
            for model in models:
                await session.refresh(model)
            return [self._to_entity(model) for model in models]

    @Logger.io
    async def update(self, *, item: InventoryItem) -> InventoryItem:
        async with self._get_session() as session:
            model = await session.get(InventoryModel, item.id)
            if model is None:
                raise NotFoundError('Inventory item not found')
            self._apply(model, item)
            await session.flush()
            return self._to_entity(model)

    @Logger.io
    async def delete(self, *, item_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(InventoryModel).where(InventoryModel.id == item_id))
