from datetime import datetime, timedelta, timezone
from typing import Optional

import attrs
import uuid_utils

from src.service.reading_room.domain.entity import (
    Location,
    Member,
    Payment,
    Seat,
    Subscription,
    WaitingListEntry,
)
from src.service.reading_room.domain.entity.member_entity import build_member_code
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.domain.enum.subscription_status import SubscriptionStatus
from test.service.reading_room.fakes import FakeUnitOfWork


NOW = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)


def add_location(uow: FakeUnitOfWork, *, name: str = 'Main Branch', total_seats: int = 3) -> Location:
    store = uow.store
    location_id = store.next_id('locations')
    location = Location(
        name=name, address='12 MG Road', total_seats=total_seats, id=location_id, created_at=NOW
    )
    store.locations[location_id] = location
    for number in range(1, total_seats + 1):
        seat_id = store.next_id('seats')
        store.seats[seat_id] = Seat(seat_number=number, location_id=location_id, id=seat_id)
    return location


def add_member(uow: FakeUnitOfWork, *, name: str = 'Ravi Kumar', email: Optional[str] = None) -> Member:
    store = uow.store
    member_id = store.next_id('members')
    member = Member(
        name=name,
        email=email or f'member{member_id}@example.com',
        phone='9876543210',
        id=member_id,
        member_code=build_member_code(member_id),
        created_at=NOW,
    )
    store.members[member_id] = member
    return member


def seat_at(uow: FakeUnitOfWork, *, location_id: int, seat_number: int) -> Seat:
    return next(
        s
        for s in uow.store.seats.values()
        if s.location_id == location_id and s.seat_number == seat_number
    )


def add_subscription(
    uow: FakeUnitOfWork,
    *,
    member: Member,
    seat: Seat,
    end_date: datetime = NOW + timedelta(days=20),
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    occupy_seat: bool = True,
    amount: int = 1500,
) -> Subscription:
    """Store a subscription with one cash payment and, by default, put it on the seat"""
    store = uow.store
    assert member.id is not None and seat.id is not None
    subscription = Subscription(
        id=uuid_utils.uuid7(),
        member_id=member.id,
        seat_id=seat.id,
        location_id=seat.location_id,
        start_date=end_date - timedelta(days=30),
        end_date=end_date,
        duration='30 days',
        total_amount=amount,
        status=status,
        created_at=end_date - timedelta(days=30),
    )
    payment = Payment(
        id=uuid_utils.uuid7(),
        subscription_id=subscription.id,
        amount=amount,
        method=PaymentMethod.CASH,
        paid_at=subscription.start_date,
    )
    subscription = subscription.with_payment(payment.id)
    store.subscriptions[subscription.id] = subscription
    store.payments[payment.id] = payment
    if occupy_seat:
        store.seats[seat.id] = seat.occupy(member_id=member.id, subscription_id=subscription.id)
    return subscription


def add_waiting(
    uow: FakeUnitOfWork,
    *,
    member: Member,
    location_id: Optional[int],
    requested_at: datetime,
    duration: Optional[str] = None,
    amount: Optional[int] = None,
) -> WaitingListEntry:
    store = uow.store
    assert member.id is not None
    entry_id = store.next_id('waiting')
    entry = attrs.evolve(
        WaitingListEntry.create(
            member_id=member.id,
            location_id=location_id,
            duration=duration,
            amount=amount,
            payment_method='cash' if amount is not None else None,
            requested_at=requested_at,
        ),
        id=entry_id,
    )
    store.waiting[entry_id] = entry
    return entry
