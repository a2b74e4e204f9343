from typing import List

from sqlalchemy import select

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_location_repo import ILocationRepo
from src.service.reading_room.domain.entity.location_entity import Location
from src.service.reading_room.driven_adapter.model.location_model import LocationModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class LocationRepoImpl(SessionRepo, ILocationRepo):
    @staticmethod
    def _to_entity(model: LocationModel) -> Location:
        return Location(
            id=model.id,
            name=model.name,
            address=model.address,
            total_seats=model.total_seats,
            is_active=model.is_active,
            created_at=model.created_at,
        )

    @Logger.io
    async def get_by_id(self, *, location_id: int) -> Location | None:
        async with self._get_session() as session:
            model = await session.get(LocationModel, location_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_active(self) -> List[Location]:
        async with self._get_session() as session:
            result = await session.execute(
                select(LocationModel)
                .where(LocationModel.is_active.is_(True))
                .order_by(LocationModel.created_at.desc(), LocationModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def create(self, *, location: Location) -> Location:
        async with self._get_session() as session:
            model = LocationModel(
                name=location.name,
                address=location.address,
                total_seats=location.total_seats,
                is_active=location.is_active,
            )
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def update(self, *, location: Location) -> Location:
        async with self._get_session() as session:
            model = await session.get(LocationModel, location.id)
            if model is None:
                raise NotFoundError('Location not found')
            model.name = location.name
            model.address = location.address
            model.total_seats = location.total_seats
            model.is_active = location.is_active
            await session.flush()
            return self._to_entity(model)
