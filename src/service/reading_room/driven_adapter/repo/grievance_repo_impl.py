from typing import List, Optional

from sqlalchemy import delete, select

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_grievance_repo import IGrievanceRepo
from src.service.reading_room.domain.entity.grievance_entity import Grievance
from src.service.reading_room.domain.enum.grievance_enums import (
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
)
from src.service.reading_room.driven_adapter.model.grievance_model import GrievanceModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class GrievanceRepoImpl(SessionRepo, IGrievanceRepo):
    @staticmethod
    def _to_entity(model: GrievanceModel) -> Grievance:
        return Grievance(
            id=model.id,
            title=model.title,
            description=model.description,
            category=GrievanceCategory(model.category),
            location_id=model.location_id,
            reported_by=model.reported_by,
            status=GrievanceStatus(model.status),
            priority=GrievancePriority(model.priority),
            resolution=model.resolution,
            resolved_by=model.resolved_by,
            resolved_at=model.resolved_at,
            created_at=model.created_at,
        )

    @staticmethod
    def _apply(model: GrievanceModel, grievance: Grievance) -> None:
        model.title = grievance.title
        model.description = grievance.description
        model.category = grievance.category.value
        model.location_id = grievance.location_id
        model.reported_by = grievance.reported_by
        model.status = grievance.status.value
        model.priority = grievance.priority.value
        model.resolution = grievance.resolution
        model.resolved_by = grievance.resolved_by
        model.resolved_at = grievance.resolved_at

    @Logger.io
    async def get_by_id(self, *, grievance_id: int) -> Grievance | None:
        async with self._get_session() as session:
            model = await session.get(GrievanceModel, grievance_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_scoped(
        self,
        *,
        location_ids: Optional[List[int]] = None,
        reported_by: Optional[int] = None,
    ) -> List[Grievance]:
        async with self._get_session() as session:
            stmt = select(GrievanceModel).order_by(
                GrievanceModel.created_at.desc(), GrievanceModel.id.desc()
            )
            if location_ids is not None:
                stmt = stmt.where(GrievanceModel.location_id.in_(location_ids))
            if reported_by is not None:
                stmt = stmt.where(GrievanceModel.reported_by == reported_by)
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def create(self, *, grievance: Grievance) -> Grievance:
        async with self._get_session() as session:
            model = GrievanceModel()
            self._apply(model, grievance)
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def update(self, *, grievance: Grievance) -> Grievance:
        async with self._get_session() as session:
            model = await session.get(GrievanceModel, grievance.id)
            if model is None:
                raise NotFoundError('Grievance not found')
            self._apply(model, grievance)
            await session.flush()
            return self._to_entity(model)

    @Logger.io
    async def delete(self, *, grievance_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(GrievanceModel).where(GrievanceModel.id == grievance_id))
