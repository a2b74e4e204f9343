from typing import Any, Dict, List, Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger


class ListWaitingListUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, location_id: Optional[int] = None) -> List[Dict[str, Any]]:
        async with self.uow:
            return await self.uow.waiting_list.list_with_details(location_id=location_id)
