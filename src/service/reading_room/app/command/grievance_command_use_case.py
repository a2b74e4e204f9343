from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.action_log_recorder import ActionLogRecorder
from src.service.reading_room.domain.entity.grievance_entity import Grievance
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.log_action import LogAction
from src.service.reading_room.domain.enum.user_role import UserRole


ENTITY = 'Grievance'


class GrievanceCommandUseCase:
    """
    Anyone logged in may raise a grievance. Staff review the ones at their locations.
    Only an admin or the reporter may delete one.
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow
        self.audit = ActionLogRecorder(uow)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def create(
        self,
        *,
        actor: UserEntity,
        title: str,
        description: str,
        category: str,
        location_id: Optional[int],
        priority: Optional[str] = None,
    ) -> Grievance:
        assert actor.id is not None
        grievance = Grievance.create(
            title=title,
            description=description,
            category=category,
            location_id=location_id,
            reported_by=actor.id,
            priority=priority,
        )
        async with self.uow:
            if not await self.uow.locations.get_by_id(location_id=grievance.location_id):
                raise NotFoundError('Location not found')
            grievance = await self.uow.grievances.create(grievance=grievance)
            await self.audit.record(
                action=LogAction.CREATE,
                entity=ENTITY,
                entity_id=grievance.id,
                details=f'Created grievance: {grievance.title} ({grievance.category.value})',
                performed_by=actor.email,
            )
            await self.uow.commit()

        Logger.base.info(f'📣 [GRIEVANCE] {actor.email} reported "{grievance.title}"')
        return grievance

    @Logger.io
    async def review(
        self,
        *,
        actor: UserEntity,
        grievance_id: int,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        resolution: Optional[str] = None,
    ) -> Grievance:
        if not actor.is_staff:
            raise ForbiddenError('Only managers and admins can perform this action')
        assert actor.id is not None

        async with self.uow:
            grievance = await self.uow.grievances.get_by_id(grievance_id=grievance_id)
            if not grievance:
                raise NotFoundError('Grievance not found')
            actor.ensure_location(grievance.location_id)

            grievance = await self.uow.grievances.update(
                grievance=grievance.review(
                    reviewer_id=actor.id,
                    now=datetime.now(timezone.utc),
                    status=status,
                    priority=priority,
                    resolution=resolution,
                )
            )
            await self.audit.record(
                action=LogAction.UPDATE,
                entity=ENTITY,
                entity_id=grievance.id,
                details=f'Updated grievance: {grievance.title} -> {grievance.status.value}',
                performed_by=actor.email,
            )
            await self.uow.commit()

        return grievance

    @Logger.io
    async def delete(self, *, actor: UserEntity, grievance_id: int) -> None:
        async with self.uow:
            grievance = await self.uow.grievances.get_by_id(grievance_id=grievance_id)
            if not grievance:
                raise NotFoundError('Grievance not found')
            if actor.role != UserRole.ADMIN and not grievance.is_reported_by(actor.id):
                raise ForbiddenError('Only an admin or the reporter can delete this grievance')

            await self.uow.grievances.delete(grievance_id=grievance_id)
            await self.audit.record(
                action=LogAction.DELETE,
                entity=ENTITY,
                entity_id=grievance_id,
                details=f'Deleted grievance: {grievance.title}',
                performed_by=actor.email,
            )
            await self.uow.commit()
