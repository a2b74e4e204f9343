from typing import List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.fee_type_entity import FeeType


class FeeTypeQueryUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_fee_types(self) -> List[FeeType]:
        async with self.uow:
            return await self.uow.fee_types.list_all()
