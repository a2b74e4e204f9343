from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.location_command_use_case import (
    LocationCommandUseCase,
)
from src.service.reading_room.app.query.location_query_use_case import LocationQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    ensure_location_access,
    get_current_user,
    require_admin,
    require_staff,
)
from src.service.reading_room.driving_adapter.http_controller.schema.location_schema import (
    LocationCreateRequest,
    LocationResponse,
    LocationUpdateRequest,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)


router = APIRouter()


@router.get('', response_model=List[LocationResponse])
@Logger.io
async def list_locations(
    current_user: UserEntity = Depends(get_current_user),
    use_case: LocationQueryUseCase = Depends(LocationQueryUseCase.depends),
) -> List[LocationResponse]:
    locations = await use_case.list_active()
    return [
        LocationResponse.model_validate(location)
        for location in locations
        if current_user.can_access_location(location.id)
    ]


@router.post('', response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_location(
    request: LocationCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: LocationCommandUseCase = Depends(LocationCommandUseCase.depends),
) -> LocationResponse:
    location = await use_case.create(
        name=request.name, address=request.address, total_seats=request.total_seats
    )
    return LocationResponse.model_validate(location)


@router.put('/{location_id}', response_model=LocationResponse)
@Logger.io
async def update_location(
    location_id: int,
    request: LocationUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: LocationCommandUseCase = Depends(LocationCommandUseCase.depends),
) -> LocationResponse:
    ensure_location_access(current_user, location_id)
    location = await use_case.update(
        location_id=location_id,
        name=request.name,
        address=request.address,
        total_seats=request.total_seats,
        is_active=request.is_active,
    )
    return LocationResponse.model_validate(location)


@router.delete('/{location_id}', response_model=MessageResponse)
@Logger.io
async def delete_location(
    location_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: LocationCommandUseCase = Depends(LocationCommandUseCase.depends),
) -> MessageResponse:
    await use_case.deactivate(location_id=location_id)
    return MessageResponse(message='Location deactivated successfully')
