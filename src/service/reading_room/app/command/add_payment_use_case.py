from datetime import datetime, timezone
from typing import Optional

import uuid_utils
from fastapi import Depends
from uuid_utils import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.payment_entity import Payment


class AddPaymentUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        subscription_id: UUID,
        amount: int,
        method: str,
        paid_at: Optional[datetime] = None,
        upi_code: Optional[str] = None,
    ) -> Payment:
        if amount <= 0:
            raise DomainError('amount must be positive')

        async with self.uow:
            subscription = await self.uow.subscriptions.get_by_id(
                subscription_id=subscription_id, for_update=True
            )
            if not subscription:
                raise NotFoundError('Subscription not found')

            payment = Payment.create(
                id=uuid_utils.uuid7(),
                subscription_id=subscription.id,
                amount=amount,
                method=method,
                paid_at=paid_at or datetime.now(timezone.utc),
                upi_code=upi_code,
            )
            await self.uow.subscriptions.update(subscription=subscription.with_payment(payment.id))
            payment = await self.uow.payments.create(payment=payment)
            await self.uow.commit()

        return payment
