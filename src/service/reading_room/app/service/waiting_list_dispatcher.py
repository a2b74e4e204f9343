from datetime import datetime, timezone
from typing import Literal, Optional

from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reading_room_metrics import metrics
from src.service.reading_room.app.service.seat_registry import SeatRegistry
from src.service.reading_room.app.service.subscription_opener import SubscriptionOpener
from src.service.reading_room.domain.entity.seat_entity import Seat
from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry
from src.service.reading_room.domain.value_object.enrollment_terms import EnrollmentTerms


DispatchScope = Literal['location', 'global']


class WaitingListDispatcher:
    """
    Hands a freed seat to the head of the waiting list.

    The head is the earliest entry by (requested_at, id). In `location` scope only
    entries queued for the seat's location, or for no particular location, compete.
    In `global` scope the whole queue does.

    By default the seat is occupied by the member alone, with no subscription behind it.
    With `creates_subscription` on, an entry carrying a duration and an amount gets a
    real Subscription and Payment built from those terms instead.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        *,
        scope: DispatchScope = 'location',
        creates_subscription: bool = False,
    ):
        self.uow = uow
        self.scope = scope
        self.creates_subscription = creates_subscription
        self.seat_registry = SeatRegistry(uow)
        self.subscription_opener = SubscriptionOpener(uow)
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def dispatch_next(self, *, freed_seat: Seat) -> Optional[WaitingListEntry]:
        assert freed_seat.id is not None, 'Only a persisted seat can be dispatched'

        with self.tracer.start_as_current_span(
            'waiting_list.dispatch_next',
            attributes={
                'seat.id': freed_seat.id,
                'seat.location_id': freed_seat.location_id,
                'dispatch.scope': self.scope,
            },
        ) as span:
            entry = await self.uow.waiting_list.claim_next(
                location_id=freed_seat.location_id if self.scope == 'location' else None
            )
            if entry is None:
                span.set_attribute('dispatch.outcome', 'empty')
                metrics.record_dispatch(outcome='empty')
                Logger.base.info(f'🪑 [DISPATCH] Seat {freed_seat.id} stays vacant, queue empty')
                return None

            assert entry.id is not None
            if self.creates_subscription and entry.has_complete_terms:
                subscription, _ = await self.subscription_opener.open(
                    member_id=entry.member_id,
                    seat=freed_seat,
                    terms=self._terms_from_entry(entry),
                )
                outcome = 'subscribed'
                Logger.base.info(
                    f'🎟️ [DISPATCH] Seat {freed_seat.id} -> member {entry.member_id} '
                    f'with subscription {subscription.id}'
                )
            else:
                await self.seat_registry.occupy(seat_id=freed_seat.id, member_id=entry.member_id)
                outcome = 'assigned'
                Logger.base.info(
                    f'🪑 [DISPATCH] Seat {freed_seat.id} -> member {entry.member_id} (no subscription)'
                )

            await self.uow.waiting_list.delete(entry_id=entry.id)

            span.set_attribute('dispatch.outcome', outcome)
            span.set_attribute('dispatch.entry_id', entry.id)
            metrics.record_dispatch(outcome=outcome)
            return entry

    @staticmethod
    def _terms_from_entry(entry: WaitingListEntry) -> EnrollmentTerms:
        # The seat only becomes available now, so a start date in the past moves forward
        now = datetime.now(timezone.utc)
        start_date = entry.start_date if entry.start_date and entry.start_date > now else now
        return EnrollmentTerms.build(
            start_date=start_date,
            duration=entry.duration or '',
            amount=entry.amount or 0,
            payment_method=entry.payment_method or 'cash',
            paid_at=entry.paid_at or now,
            upi_code=entry.upi_code,
        )
