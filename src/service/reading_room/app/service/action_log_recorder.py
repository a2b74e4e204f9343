from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.action_log_entity import SYSTEM_ACTOR, ActionLog
from src.service.reading_room.domain.enum.log_action import LogAction


class ActionLogRecorder:
    """
    Appends to the action log inside the caller's unit of work.

    Never commits: a change that rolls back takes its log line with it.
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    async def record(
        self,
        *,
        action: LogAction,
        entity: str,
        entity_id: object,
        details: str,
        performed_by: str = SYSTEM_ACTOR,
    ) -> ActionLog:
        log = await self.uow.action_logs.create(
            log=ActionLog(
                action=action,
                entity=entity,
                entity_id=str(entity_id),
                details=details,
                performed_by=performed_by or SYSTEM_ACTOR,
            )
        )
        Logger.base.debug(f'🧾 [AUDIT] {performed_by} {action.value} {entity} {entity_id}')
        return log
