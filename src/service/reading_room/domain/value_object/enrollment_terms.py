from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.domain.value_object.plan_duration import PlanDuration


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC"""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


@attrs.frozen
class EnrollmentTerms:
    """What a member asked for when enrolling: plan, price and how the first payment was made."""

    start_date: datetime
    duration: PlanDuration
    amount: int
    payment_method: PaymentMethod
    paid_at: datetime
    upi_code: Optional[str] = None

    @classmethod
    def build(
        cls,
        *,
        start_date: datetime,
        duration: str,
        amount: int,
        payment_method: str,
        paid_at: datetime,
        upi_code: Optional[str] = None,
    ) -> 'EnrollmentTerms':
        if amount < 0:
            raise DomainError('amount must not be negative', 400)
        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise DomainError('payment_method must be either "UPI" or "cash"', 400) from None

        return cls(
            start_date=as_utc(start_date),
            duration=PlanDuration.parse(duration),
            amount=amount,
            payment_method=method,
            paid_at=as_utc(paid_at),
            upi_code=upi_code if method == PaymentMethod.UPI else None,
        )

    @property
    def end_date(self) -> datetime:
        return self.duration.end_date(self.start_date)
