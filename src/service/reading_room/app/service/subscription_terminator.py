import time
from typing import Optional

import attrs
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reading_room_metrics import metrics
from src.service.reading_room.app.service.seat_registry import SeatRegistry
from src.service.reading_room.app.service.waiting_list_dispatcher import WaitingListDispatcher
from src.service.reading_room.domain.entity.seat_entity import Seat
from src.service.reading_room.domain.entity.subscription_entity import Subscription
from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry


@attrs.frozen
class TerminationResult:
    subscription: Subscription
    seat_freed: bool = False
    dispatched: Optional[WaitingListEntry] = None


class SubscriptionTerminator:
    """
    Expire a subscription, free its seat and hand the seat to the waiting list.

    Runs inside the caller's unit of work and never commits, so the caller decides
    whether expire, free and dispatch land together or not at all.
    """

    def __init__(self, uow: AbstractUnitOfWork, *, dispatcher: WaitingListDispatcher | None = None):
        self.uow = uow
        self.seat_registry = SeatRegistry(uow)
        self.dispatcher = dispatcher or WaitingListDispatcher(
            uow,
            scope=settings.WAITING_LIST_DISPATCH_SCOPE,
            creates_subscription=settings.WAITING_LIST_CREATES_SUBSCRIPTION,
        )
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def terminate(
        self, *, subscription_id: UUID, trigger: str = 'manual'
    ) -> TerminationResult:
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'subscription.terminate',
            attributes={'subscription.id': str(subscription_id), 'termination.trigger': trigger},
        ):
            subscription = await self.uow.subscriptions.get_by_id(
                subscription_id=subscription_id, for_update=True
            )
            if not subscription:
                raise NotFoundError('Subscription not found')

            was_active = subscription.is_active
            if was_active:
                subscription = await self.uow.subscriptions.update(
                    subscription=subscription.expire()
                )

            seat = await self.uow.seats.get_by_id(seat_id=subscription.seat_id, for_update=True)
            if seat is None:
                Logger.base.warning(
                    f'⚠️ [TERMINATE] Seat {subscription.seat_id} of subscription {subscription_id} '
                    'no longer exists, treating as reconciled'
                )
                metrics.record_termination(trigger=trigger, duration=time.perf_counter() - start)
                return TerminationResult(subscription=subscription)

            if not was_active and not seat.is_held_by(subscription.id):
                # Its seat was already released, dispatching again would hand it out twice
                Logger.base.info(
                    f'⏹️ [TERMINATE] Subscription {subscription_id} already expired '
                    f'and no longer holds seat {seat.id}'
                )
                metrics.record_termination(trigger=trigger, duration=time.perf_counter() - start)
                return TerminationResult(subscription=subscription)

            if not self._owns_seat(subscription=subscription, seat=seat):
                Logger.base.warning(
                    f'⚠️ [TERMINATE] Seat {seat.id} is held by member {seat.assigned_member_id} '
                    f'(subscription {seat.subscription_id}), leaving it untouched'
                )
                metrics.record_termination(trigger=trigger, duration=time.perf_counter() - start)
                return TerminationResult(subscription=subscription)

            freed_seat = await self.seat_registry.free(seat=seat)
            dispatched = await self.dispatcher.dispatch_next(freed_seat=freed_seat)

            Logger.base.info(
                f'⏹️ [TERMINATE] Subscription {subscription_id} expired, seat {seat.id} freed'
                + (f', handed to member {dispatched.member_id}' if dispatched else '')
            )
            metrics.record_termination(trigger=trigger, duration=time.perf_counter() - start)
            return TerminationResult(
                subscription=subscription, seat_freed=True, dispatched=dispatched
            )

    @staticmethod
    def _owns_seat(*, subscription: Subscription, seat: Seat) -> bool:
        if seat.is_vacant or seat.is_held_by(subscription.id):
            return True
        # Bare occupancy by the same member predates subscription references
        return seat.subscription_id is None and seat.assigned_member_id == subscription.member_id
