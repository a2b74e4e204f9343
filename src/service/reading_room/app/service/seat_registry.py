from typing import Optional

from uuid_utils import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.seat_entity import Seat


class SeatRegistry:
    """Frees and occupies seats inside the caller's unit of work. Never commits."""

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @Logger.io
    async def free(self, *, seat: Seat) -> Seat:
        if seat.is_vacant:
            return seat
        return await self.uow.seats.update(seat=seat.free())

    @Logger.io
    async def occupy(
        self, *, seat_id: int, member_id: int, subscription_id: Optional[UUID] = None
    ) -> Seat:
        seat = await self.uow.seats.get_by_id(seat_id=seat_id, for_update=True)
        if not seat:
            raise NotFoundError('Seat not found')
        return await self.uow.seats.update(
            seat=seat.occupy(member_id=member_id, subscription_id=subscription_id)
        )
