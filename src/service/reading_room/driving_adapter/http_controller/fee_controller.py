from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.fee_type_command_use_case import FeeTypeCommandUseCase
from src.service.reading_room.app.query.fee_type_query_use_case import FeeTypeQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import require_staff
from src.service.reading_room.driving_adapter.http_controller.schema.fee_schema import (
    FeeTypeCreateRequest,
    FeeTypeResponse,
    FeeTypeUpdateRequest,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)


router = APIRouter()


@router.get('', response_model=List[FeeTypeResponse])
@Logger.io
async def list_fee_types(
    current_user: UserEntity = Depends(require_staff),
    use_case: FeeTypeQueryUseCase = Depends(FeeTypeQueryUseCase.depends),
) -> List[FeeTypeResponse]:
    return [FeeTypeResponse.model_validate(fee) for fee in await use_case.list_fee_types()]


@router.post('', response_model=FeeTypeResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_fee_type(
    request: FeeTypeCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: FeeTypeCommandUseCase = Depends(FeeTypeCommandUseCase.depends),
) -> FeeTypeResponse:
    fee_type = await use_case.create(
        actor=current_user, name=request.name, amount=request.amount, duration=request.duration
    )
    return FeeTypeResponse.model_validate(fee_type)


@router.put('/{fee_type_id}', response_model=FeeTypeResponse)
@Logger.io
async def update_fee_type(
    fee_type_id: int,
    request: FeeTypeUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: FeeTypeCommandUseCase = Depends(FeeTypeCommandUseCase.depends),
) -> FeeTypeResponse:
    fee_type = await use_case.update(
        actor=current_user,
        fee_type_id=fee_type_id,
        name=request.name,
        amount=request.amount,
        duration=request.duration,
    )
    return FeeTypeResponse.model_validate(fee_type)


@router.delete('/{fee_type_id}', response_model=MessageResponse)
@Logger.io
async def delete_fee_type(
    fee_type_id: int,
    current_user: UserEntity = Depends(require_staff),
    use_case: FeeTypeCommandUseCase = Depends(FeeTypeCommandUseCase.depends),
) -> MessageResponse:
    await use_case.delete(actor=current_user, fee_type_id=fee_type_id)
    return MessageResponse(message='Fee type deleted')
