from typing import Any, Dict, List, Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reading_room_metrics import metrics


class ListSeatsUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, location_id: Optional[int] = None) -> List[Dict[str, Any]]:
        async with self.uow:
            seats = await self.uow.seats.list_with_details(location_id=location_id)

        if location_id is None:
            metrics.occupied_seats.set(sum(1 for seat in seats if seat['status'] == 'occupied'))
        return seats
