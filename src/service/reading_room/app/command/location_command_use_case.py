from typing import Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.location_entity import Location


class LocationCommandUseCase:
    """Locations own their seats: creating or growing a location lays out seats 1..total_seats"""

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def create(self, *, name: str, address: str, total_seats: int) -> Location:
        location = Location.create(name=name, address=address, total_seats=total_seats)
        async with self.uow:
            location = await self.uow.locations.create(location=location)
            assert location.id is not None
            created = await self.uow.seats.create_many(
                location_id=location.id, seat_numbers=location.missing_seat_numbers(set())
            )
            await self.uow.commit()

        Logger.base.info(f'🏢 [LOCATION] Created {location.name} with {created} seats')
        return location

    @Logger.io
    async def update(
        self,
        *,
        location_id: int,
        name: Optional[str] = None,
        address: Optional[str] = None,
        total_seats: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> Location:
        async with self.uow:
            location = await self.uow.locations.get_by_id(location_id=location_id)
            if not location:
                raise NotFoundError('Location not found')

            location = location.update(name=name, address=address, total_seats=total_seats)
            if is_active is not None:
                location = location.deactivate() if not is_active else location.activate()
            location = await self.uow.locations.update(location=location)

            # Shrinking never deletes seats, members may still be sitting on them
            existing = await self.uow.seats.list_seat_numbers(location_id=location_id)
            missing = location.missing_seat_numbers(existing)
            if missing:
                await self.uow.seats.create_many(location_id=location_id, seat_numbers=missing)
            await self.uow.commit()

        return location

    @Logger.io
    async def deactivate(self, *, location_id: int) -> None:
        async with self.uow:
            location = await self.uow.locations.get_by_id(location_id=location_id)
            if not location:
                raise NotFoundError('Location not found')
            await self.uow.locations.update(location=location.deactivate())
            await self.uow.commit()
