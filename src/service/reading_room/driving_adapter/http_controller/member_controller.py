from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.member_command_use_case import MemberCommandUseCase
from src.service.reading_room.app.query.member_query_use_case import MemberQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    ensure_member_access,
    get_current_user,
    require_admin,
    require_staff,
)
from src.service.reading_room.driving_adapter.http_controller.schema.member_schema import (
    MemberCreateRequest,
    MemberResponse,
    MemberUpdateRequest,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)


router = APIRouter()


@router.get('', response_model=List[MemberResponse])
@Logger.io
async def list_members(
    current_user: UserEntity = Depends(require_staff),
    use_case: MemberQueryUseCase = Depends(MemberQueryUseCase.depends),
) -> List[MemberResponse]:
    return [MemberResponse.model_validate(member) for member in await use_case.list_members()]


@router.post('', response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_member(
    request: MemberCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: MemberCommandUseCase = Depends(MemberCommandUseCase.depends),
) -> MemberResponse:
    member = await use_case.create(
        name=request.name,
        email=request.email,
        phone=request.phone,
        address=request.address,
        exam_prep=request.exam_prep,
    )
    return MemberResponse.model_validate(member)


@router.get('/{member_id}', response_model=MemberResponse)
@Logger.io
async def get_member(
    member_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: MemberQueryUseCase = Depends(MemberQueryUseCase.depends),
) -> MemberResponse:
    member = await use_case.get_member(member_id=member_id)
    ensure_member_access(current_user, member)
    return MemberResponse.model_validate(member)


@router.put('/{member_id}', response_model=MemberResponse)
@Logger.io
async def update_member(
    member_id: int,
    request: MemberUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: MemberCommandUseCase = Depends(MemberCommandUseCase.depends),
) -> MemberResponse:
    member = await use_case.update(
        member_id=member_id,
        name=request.name,
        email=request.email,
        phone=request.phone,
        address=request.address,
        exam_prep=request.exam_prep,
        performed_by=current_user.email,
    )
    return MemberResponse.model_validate(member)


@router.delete('/{member_id}', response_model=MessageResponse)
@Logger.io
async def delete_member(
    member_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: MemberCommandUseCase = Depends(MemberCommandUseCase.depends),
) -> MessageResponse:
    await use_case.delete(member_id=member_id, performed_by=current_user.email)
    return MessageResponse(message='Member deleted')
