from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.query.payment_history_use_case import PaymentHistoryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    ensure_member_access,
    get_current_user,
)
from src.service.reading_room.driving_adapter.http_controller.schema.member_schema import (
    MemberResponse,
)
from src.service.reading_room.driving_adapter.http_controller.schema.payment_schema import (
    PaymentHistoryItem,
    PaymentHistoryResponse,
    PaymentSummary,
)


router = APIRouter()


@router.get('/member/{member_code}', response_model=PaymentHistoryResponse)
@Logger.io
async def get_payment_history(
    member_code: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: PaymentHistoryUseCase = Depends(PaymentHistoryUseCase.depends),
) -> PaymentHistoryResponse:
    history = await use_case.execute(member_code=member_code)
    ensure_member_access(current_user, history['member'])

    return PaymentHistoryResponse(
        member=MemberResponse.model_validate(history['member']),
        payments=[PaymentHistoryItem.model_validate(p) for p in history['payments']],
        summary=PaymentSummary(**history['summary']),
    )
