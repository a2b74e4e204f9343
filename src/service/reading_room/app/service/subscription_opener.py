import uuid_utils

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.seat_registry import SeatRegistry
from src.service.reading_room.domain.entity.payment_entity import Payment
from src.service.reading_room.domain.entity.seat_entity import Seat
from src.service.reading_room.domain.entity.subscription_entity import Subscription
from src.service.reading_room.domain.value_object.enrollment_terms import EnrollmentTerms


class SubscriptionOpener:
    """
    Opens a subscription on a vacant seat: Subscription, its first Payment, then the
    seat occupancy referencing both member and subscription.
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow
        self.seat_registry = SeatRegistry(uow)

    @Logger.io
    async def open(
        self, *, member_id: int, seat: Seat, terms: EnrollmentTerms
    ) -> tuple[Subscription, Payment]:
        assert seat.id is not None, 'Seat must be persisted before it can be subscribed'

        subscription = Subscription.create(
            id=uuid_utils.uuid7(),
            member_id=member_id,
            seat_id=seat.id,
            location_id=seat.location_id,
            terms=terms,
        )
        payment = Payment.create(
            id=uuid_utils.uuid7(),
            subscription_id=subscription.id,
            amount=terms.amount,
            method=terms.payment_method,
            paid_at=terms.paid_at,
            upi_code=terms.upi_code,
        )

        subscription = await self.uow.subscriptions.create(
            subscription=subscription.with_payment(payment.id)
        )
        payment = await self.uow.payments.create(payment=payment)
        await self.seat_registry.occupy(
            seat_id=seat.id, member_id=member_id, subscription_id=subscription.id
        )
        return subscription, payment
