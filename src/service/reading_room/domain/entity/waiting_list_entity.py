from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.domain.value_object.enrollment_terms import as_utc
from src.service.reading_room.domain.value_object.plan_duration import PlanDuration


@attrs.define
class WaitingListEntry:
    member_id: int
    requested_at: datetime
    location_id: Optional[int] = None
    id: Optional[int] = None
    start_date: Optional[datetime] = None
    duration: Optional[str] = None
    amount: Optional[int] = None
    payment_method: Optional[str] = None
    upi_code: Optional[str] = attrs.field(default=None, repr=False)
    paid_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        member_id: Optional[int],
        location_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        duration: Optional[str] = None,
        amount: Optional[int] = None,
        payment_method: Optional[str] = None,
        upi_code: Optional[str] = None,
        paid_at: Optional[datetime] = None,
        requested_at: Optional[datetime] = None,
    ) -> 'WaitingListEntry':
        if member_id is None:
            raise DomainError('member_id is required')
        if amount is not None and amount < 0:
            raise DomainError('amount must not be negative')
        # Terms are checked now so a later dispatch can rely on them
        if duration is not None:
            duration = str(PlanDuration.parse(duration))
        if payment_method is not None:
            try:
                payment_method = PaymentMethod(payment_method).value
            except ValueError:
                raise DomainError('payment_method must be either "UPI" or "cash"') from None

        return cls(
            member_id=member_id,
            location_id=location_id,
            requested_at=as_utc(requested_at) if requested_at else datetime.now(timezone.utc),
            start_date=as_utc(start_date) if start_date else None,
            duration=duration,
            amount=amount,
            payment_method=payment_method,
            upi_code=upi_code,
            paid_at=as_utc(paid_at) if paid_at else None,
        )

    @property
    def has_complete_terms(self) -> bool:
        return self.duration is not None and self.amount is not None
