from typing import List, Optional

from sqlalchemy import select

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_action_log_repo import IActionLogRepo
from src.service.reading_room.domain.entity.action_log_entity import ActionLog
from src.service.reading_room.domain.enum.log_action import LogAction
from src.service.reading_room.driven_adapter.model.action_log_model import ActionLogModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class ActionLogRepoImpl(SessionRepo, IActionLogRepo):
    @staticmethod
    def _to_entity(model: ActionLogModel) -> ActionLog:
        return ActionLog(
            id=model.id,
            action=LogAction(model.action),
            entity=model.entity,
            entity_id=model.entity_id,
            details=model.details,
            performed_by=model.performed_by,
            created_at=model.created_at,
        )

    @Logger.io
    async def create(self, *, log: ActionLog) -> ActionLog:
        async with self._get_session() as session:
            model = ActionLogModel(
                action=log.action.value,
                entity=log.entity,
                entity_id=log.entity_id,
                details=log.details,
                performed_by=log.performed_by,
            )
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def list_recent(
        self, *, entity: Optional[str] = None, limit: int = 100
    ) -> List[ActionLog]:
        async with self._get_session() as session:
            stmt = (
                select(ActionLogModel)
                .order_by(ActionLogModel.created_at.desc(), ActionLogModel.id.desc())
                .limit(limit)
            )
            if entity is not None:
                stmt = stmt.where(ActionLogModel.entity == entity)
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars()]
