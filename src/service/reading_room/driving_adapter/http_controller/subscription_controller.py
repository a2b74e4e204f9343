from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.reading_room.app.command.add_payment_use_case import AddPaymentUseCase
from src.service.reading_room.app.command.enroll_member_use_case import EnrollMemberUseCase
from src.service.reading_room.app.command.expire_lapsed_subscriptions_use_case import (
    ExpireLapsedSubscriptionsUseCase,
)
from src.service.reading_room.app.command.terminate_subscription_use_case import (
    TerminateSubscriptionUseCase,
)
from src.service.reading_room.app.query.list_subscriptions_use_case import (
    ListSubscriptionsUseCase,
)
from src.service.reading_room.app.query.member_query_use_case import MemberQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    ensure_location_access,
    ensure_member_access,
    get_current_user,
    require_staff,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    AddPaymentRequest,
    EnrollRequest,
    EnrollResponse,
    ExpireLapsedResponse,
    MessageResponse,
    PaymentResponse,
    SubscriptionDetailResponse,
    SubscriptionResponse,
)


router = APIRouter()


@router.get('', response_model=List[SubscriptionDetailResponse])
@Logger.io
async def list_subscriptions(
    current_user: UserEntity = Depends(require_staff),
    use_case: ListSubscriptionsUseCase = Depends(ListSubscriptionsUseCase.depends),
) -> List[Dict[str, Any]]:
    subscriptions = await use_case.list_all()
    return [s for s in subscriptions if current_user.can_access_location(s['location_id'])]


@router.post('', response_model=EnrollResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def enroll_member(
    request: EnrollRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: EnrollMemberUseCase = Depends(EnrollMemberUseCase.depends),
) -> EnrollResponse:
    ensure_location_access(current_user, request.location_id)

    result = await use_case.execute(
        member_id=request.member_id,
        location_id=request.location_id,
        seat_number=request.seat_number,
        start_date=request.start_date,
        duration=request.duration,
        amount=request.amount,
        payment_method=request.payment_method.value,
        paid_at=request.paid_at,
        upi_code=request.upi_code,
    )

    return EnrollResponse(
        message=result.message,
        subscription=(
            SubscriptionResponse.model_validate(result.subscription)
            if result.subscription
            else None
        ),
        payment=PaymentResponse.model_validate(result.payment) if result.payment else None,
        waiting_entry_id=result.waiting_entry.id if result.waiting_entry else None,
    )


@router.put('/{subscription_id}', response_model=MessageResponse)
@Logger.io
async def terminate_subscription(
    subscription_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_staff),
    use_case: TerminateSubscriptionUseCase = Depends(TerminateSubscriptionUseCase.depends),
) -> MessageResponse:
    message = await use_case.execute(subscription_id=subscription_id)
    return MessageResponse(message=message)


@router.post(
    '/{subscription_id}/payment',
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
@Logger.io
async def add_payment(
    subscription_id: UtilsUUID7,
    request: AddPaymentRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: AddPaymentUseCase = Depends(AddPaymentUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.execute(
        subscription_id=subscription_id,
        amount=request.amount,
        method=request.method.value,
        paid_at=request.paid_at,
        upi_code=request.upi_code,
    )
    return PaymentResponse.model_validate(payment)


@router.post('/expire-lapsed', response_model=ExpireLapsedResponse)
@Logger.io
async def expire_lapsed_subscriptions(
    current_user: UserEntity = Depends(require_staff),
    use_case: ExpireLapsedSubscriptionsUseCase = Depends(ExpireLapsedSubscriptionsUseCase.depends),
) -> ExpireLapsedResponse:
    expired_ids = await use_case.execute()
    return ExpireLapsedResponse(
        message=f'{len(expired_ids)} subscription(s) expired',
        subscription_ids=[str(subscription_id) for subscription_id in expired_ids],
    )


@router.get('/member/{member_id}', response_model=List[SubscriptionDetailResponse])
@Logger.io
async def list_member_subscriptions(
    member_id: int,
    current_user: UserEntity = Depends(get_current_user),
    member_query: MemberQueryUseCase = Depends(MemberQueryUseCase.depends),
    use_case: ListSubscriptionsUseCase = Depends(ListSubscriptionsUseCase.depends),
) -> List[Dict[str, Any]]:
    member = await member_query.get_member(member_id=member_id)
    ensure_member_access(current_user, member)
    return await use_case.list_for_member(member_id=member_id)
