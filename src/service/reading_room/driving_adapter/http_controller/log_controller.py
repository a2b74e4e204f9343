from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.query.action_log_query_use_case import ActionLogQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.reading_room.driving_adapter.http_controller.schema.log_schema import (
    ActionLogResponse,
)


router = APIRouter()


@router.get('', response_model=List[ActionLogResponse])
@Logger.io
async def list_action_logs(
    entity: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    current_user: UserEntity = Depends(require_admin),
    use_case: ActionLogQueryUseCase = Depends(ActionLogQueryUseCase.depends),
) -> List[ActionLogResponse]:
    logs = await use_case.list_recent(entity=entity, limit=limit)
    return [ActionLogResponse.model_validate(log) for log in logs]
