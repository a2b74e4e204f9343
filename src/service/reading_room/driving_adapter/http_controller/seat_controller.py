from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.reconcile_seats_use_case import ReconcileSeatsUseCase
from src.service.reading_room.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.reading_room.driving_adapter.http_controller.schema.seat_schema import (
    ReconcileSeatsResponse,
    SeatResponse,
)


router = APIRouter()


@router.get('', response_model=List[SeatResponse])
@Logger.io
async def list_seats(
    location_id: Optional[int] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> List[Dict[str, Any]]:
    return await use_case.execute(location_id=location_id)


@router.post('/reconcile', response_model=ReconcileSeatsResponse)
@Logger.io
async def reconcile_seats(
    current_user: UserEntity = Depends(require_admin),
    use_case: ReconcileSeatsUseCase = Depends(ReconcileSeatsUseCase.depends),
) -> ReconcileSeatsResponse:
    freed = await use_case.execute()
    return ReconcileSeatsResponse(message='Seat statuses reconciled', freed_seats=freed)
