from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.grievance_command_use_case import (
    GrievanceCommandUseCase,
)
from src.service.reading_room.app.query.grievance_query_use_case import GrievanceQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_staff,
)
from src.service.reading_room.driving_adapter.http_controller.schema.grievance_schema import (
    GrievanceCreateRequest,
    GrievanceResponse,
    GrievanceReviewRequest,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)


router = APIRouter()


@router.get('', response_model=List[GrievanceResponse])
@Logger.io
async def list_grievances(
    current_user: UserEntity = Depends(get_current_user),
    use_case: GrievanceQueryUseCase = Depends(GrievanceQueryUseCase.depends),
) -> List[GrievanceResponse]:
    grievances = await use_case.list_grievances(actor=current_user)
    return [GrievanceResponse.model_validate(grievance) for grievance in grievances]


@router.post('', response_model=GrievanceResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_grievance(
    request: GrievanceCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GrievanceCommandUseCase = Depends(GrievanceCommandUseCase.depends),
) -> GrievanceResponse:
    grievance = await use_case.create(
        actor=current_user,
        title=request.title,
        description=request.description,
        category=request.category.value,
        location_id=request.location_id,
        priority=request.priority.value if request.priority else None,
    )
    return GrievanceResponse.model_validate(grievance)


@router.get('/{grievance_id}', response_model=GrievanceResponse)
@Logger.io
async def get_grievance(
    grievance_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GrievanceQueryUseCase = Depends(GrievanceQueryUseCase.depends),
) -> GrievanceResponse:
    grievance = await use_case.get_grievance(actor=current_user, grievance_id=grievance_id)
    return GrievanceResponse.model_validate(grievance)


@router.put('/{grievance_id}', response_model=GrievanceResponse)
@Logger.io
async def review_grievance(
    grievance_id: int,
    request: GrievanceReviewRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: GrievanceCommandUseCase = Depends(GrievanceCommandUseCase.depends),
) -> GrievanceResponse:
    grievance = await use_case.review(
        actor=current_user,
        grievance_id=grievance_id,
        status=request.status.value if request.status else None,
        priority=request.priority.value if request.priority else None,
        resolution=request.resolution,
    )
    return GrievanceResponse.model_validate(grievance)


@router.delete('/{grievance_id}', response_model=MessageResponse)
@Logger.io
async def delete_grievance(
    grievance_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GrievanceCommandUseCase = Depends(GrievanceCommandUseCase.depends),
) -> MessageResponse:
    await use_case.delete(actor=current_user, grievance_id=grievance_id)
    return MessageResponse(message='Grievance deleted')
