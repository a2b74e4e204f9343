from datetime import datetime, timezone
from typing import Optional

import attrs
from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reading_room_metrics import metrics
from src.service.reading_room.app.service.seat_registry import SeatRegistry
from src.service.reading_room.app.service.subscription_opener import SubscriptionOpener
from src.service.reading_room.domain.entity.payment_entity import Payment
from src.service.reading_room.domain.entity.subscription_entity import Subscription
from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry
from src.service.reading_room.domain.value_object.enrollment_terms import EnrollmentTerms


@attrs.frozen
class EnrollmentResult:
    message: str
    subscription: Optional[Subscription] = None
    payment: Optional[Payment] = None
    waiting_entry: Optional[WaitingListEntry] = None


class EnrollMemberUseCase:
    """
    Put a member on a seat.

    Flow (one transaction):
    1. Resolve member and seat
    2. A seat held by a lapsed subscription is released first
    3. Vacant seat: create Subscription + first Payment, occupy the seat
    4. Held seat: queue the member with the requested terms
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        member_id: int,
        location_id: int,
        seat_number: int,
        start_date: datetime,
        duration: str,
        amount: int,
        payment_method: str,
        paid_at: Optional[datetime] = None,
        upi_code: Optional[str] = None,
    ) -> EnrollmentResult:
        now = datetime.now(timezone.utc)
        terms = EnrollmentTerms.build(
            start_date=start_date,
            duration=duration,
            amount=amount,
            payment_method=payment_method,
            paid_at=paid_at or now,
            upi_code=upi_code,
        )

        async with self.uow:
            member = await self.uow.members.get_by_id(member_id=member_id)
            if not member:
                raise NotFoundError('Member not found')

            # Locked so a concurrent enroll or hand-over cannot claim the same seat
            seat = await self.uow.seats.get_by_number(
                location_id=location_id, seat_number=seat_number, for_update=True
            )
            if not seat:
                raise NotFoundError('Seat not found')

            if not seat.is_vacant and seat.subscription_id is not None:
                current = await self.uow.subscriptions.get_by_id(
                    subscription_id=seat.subscription_id, for_update=True
                )
                if current and current.is_active and current.has_lapsed(now):
                    await self.uow.subscriptions.update(subscription=current.expire())
                    seat = await SeatRegistry(self.uow).free(seat=seat)
                    metrics.record_termination(trigger='enrollment', duration=0.0)
                    Logger.base.info(
                        f'⏹️ [ENROLL] Lapsed subscription {current.id} released seat {seat.id}'
                    )

            if not seat.is_vacant:
                entry = await self._queue(member_id=member_id, location_id=location_id, terms=terms)
                await self.uow.commit()
                metrics.record_enrollment(outcome='queued')
                return EnrollmentResult(
                    message='Seat occupied, added to waiting list', waiting_entry=entry
                )

            subscription, payment = await SubscriptionOpener(self.uow).open(
                member_id=member_id, seat=seat, terms=terms
            )
            await self.uow.commit()

        metrics.record_enrollment(outcome='enrolled')
        Logger.base.info(
            f'✅ [ENROLL] Member {member_id} on seat {seat_number} at location {location_id}, '
            f'subscription {subscription.id}'
        )
        return EnrollmentResult(
            message='Subscription created', subscription=subscription, payment=payment
        )

    async def _queue(
        self, *, member_id: int, location_id: int, terms: EnrollmentTerms
    ) -> WaitingListEntry:
        if await self.uow.waiting_list.exists(member_id=member_id, location_id=location_id):
            raise ConflictError('Member is already on the waiting list for this location')

        return await self.uow.waiting_list.create(
            entry=WaitingListEntry.create(
                member_id=member_id,
                location_id=location_id,
                start_date=terms.start_date,
                duration=str(terms.duration),
                amount=terms.amount,
                payment_method=terms.payment_method.value,
                upi_code=terms.upi_code,
                paid_at=terms.paid_at,
            )
        )
