from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.domain.value_object.enrollment_terms import as_utc


@attrs.frozen
class Payment:
    id: UUID
    subscription_id: UUID
    amount: int
    method: PaymentMethod
    paid_at: datetime
    upi_code: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        id: UUID,
        subscription_id: UUID,
        amount: int,
        method: PaymentMethod | str,
        paid_at: datetime,
        upi_code: Optional[str] = None,
    ) -> 'Payment':
        if amount < 0:
            raise DomainError('amount must not be negative', 400)
        try:
            payment_method = PaymentMethod(method)
        except ValueError:
            raise DomainError('method must be either "UPI" or "cash"', 400) from None

        return cls(
            id=id,
            subscription_id=subscription_id,
            amount=amount,
            method=payment_method,
            paid_at=as_utc(paid_at),
            upi_code=upi_code if payment_method == PaymentMethod.UPI else None,
        )
