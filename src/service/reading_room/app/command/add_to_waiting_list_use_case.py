from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry


class AddToWaitingListUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        member_id: Optional[int],
        location_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        duration: Optional[str] = None,
        amount: Optional[int] = None,
        payment_method: Optional[str] = None,
        upi_code: Optional[str] = None,
        paid_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        # Validates member_id and the optional terms before touching the database
        entry = WaitingListEntry.create(
            member_id=member_id,
            location_id=location_id,
            start_date=start_date,
            duration=duration,
            amount=amount,
            payment_method=payment_method,
            upi_code=upi_code,
            paid_at=paid_at,
        )

        async with self.uow:
            if not await self.uow.members.get_by_id(member_id=entry.member_id):
                raise NotFoundError('Member not found')
            if location_id is not None and not await self.uow.locations.get_by_id(
                location_id=location_id
            ):
                raise NotFoundError('Location not found')

            if await self.uow.waiting_list.exists(
                member_id=entry.member_id, location_id=location_id
            ):
                raise ConflictError('Member is already on the waiting list for this location')

            entry = await self.uow.waiting_list.create(entry=entry)
            assert entry.id is not None
            created = await self.uow.waiting_list.get_with_details(entry_id=entry.id)
            await self.uow.commit()

        Logger.base.info(
            f'📝 [WAITING] Member {entry.member_id} queued for location {location_id} (entry {entry.id})'
        )
        assert created is not None
        return created
