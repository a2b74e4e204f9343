from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.add_to_waiting_list_use_case import (
    AddToWaitingListUseCase,
)
from src.service.reading_room.app.command.remove_from_waiting_list_use_case import (
    RemoveFromWaitingListUseCase,
)
from src.service.reading_room.app.query.list_waiting_list_use_case import ListWaitingListUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    ensure_location_access,
    require_staff,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)
from src.service.reading_room.driving_adapter.http_controller.schema.waiting_schema import (
    WaitingListCreateRequest,
    WaitingListEntryResponse,
)


router = APIRouter()


@router.get('', response_model=List[WaitingListEntryResponse])
@Logger.io
async def list_waiting_entries(
    location_id: Optional[int] = None,
    current_user: UserEntity = Depends(require_staff),
    use_case: ListWaitingListUseCase = Depends(ListWaitingListUseCase.depends),
) -> List[Dict[str, Any]]:
    return await use_case.execute(location_id=location_id)


@router.post('', response_model=WaitingListEntryResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_waiting_entry(
    request: WaitingListCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: AddToWaitingListUseCase = Depends(AddToWaitingListUseCase.depends),
) -> Dict[str, Any]:
    if request.location_id is not None:
        ensure_location_access(current_user, request.location_id)

    return await use_case.execute(
        member_id=request.member_id,
        location_id=request.location_id,
        start_date=request.start_date,
        duration=request.duration,
        amount=request.amount,
        payment_method=request.payment_method.value if request.payment_method else None,
        upi_code=request.upi_code,
        paid_at=request.paid_at,
    )


@router.delete('/{entry_id}', response_model=MessageResponse)
@Logger.io
async def remove_waiting_entry(
    entry_id: int,
    current_user: UserEntity = Depends(require_staff),
    use_case: RemoveFromWaitingListUseCase = Depends(RemoveFromWaitingListUseCase.depends),
) -> MessageResponse:
    await use_case.execute(entry_id=entry_id)
    return MessageResponse(message='Removed from waiting list')
