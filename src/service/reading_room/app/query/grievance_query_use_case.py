from typing import List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.grievance_entity import Grievance
from src.service.reading_room.domain.entity.user_entity import UserEntity


class GrievanceQueryUseCase:
    """Members see what they reported, staff what happened at their locations"""

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_grievances(self, *, actor: UserEntity) -> List[Grievance]:
        async with self.uow:
            if not actor.is_staff:
                return await self.uow.grievances.list_scoped(reported_by=actor.id or 0)
            return await self.uow.grievances.list_scoped(location_ids=actor.location_scope)

    @Logger.io
    async def get_grievance(self, *, actor: UserEntity, grievance_id: int) -> Grievance:
        async with self.uow:
            grievance = await self.uow.grievances.get_by_id(grievance_id=grievance_id)
        if not grievance:
            raise NotFoundError('Grievance not found')
        if actor.is_staff:
            actor.ensure_location(grievance.location_id)
        elif not grievance.is_reported_by(actor.id):
            raise ForbiddenError("You don't have permission to view this grievance")
        return grievance
