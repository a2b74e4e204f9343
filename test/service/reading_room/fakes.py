"""
In-memory repositories and unit of work for use case and API tests.

State lives in one InMemoryStore. The unit of work snapshots it on enter and on
commit, and restores the last snapshot on rollback, so a use case that fails
halfway leaves nothing behind.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import attrs
from uuid_utils import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.service.reading_room.app.interface import (
    IActionLogRepo,
    IExpenseRepo,
    IFeeTypeRepo,
    IGrievanceRepo,
    IInventoryRepo,
    ILocationRepo,
    IMemberRepo,
    IPaymentRepo,
    ISeatRepo,
    ISubscriptionRepo,
    IUserRepo,
    IWaitingListRepo,
)
from src.service.reading_room.domain.entity import (
    ActionLog,
    Expense,
    FeeType,
    Grievance,
    InventoryItem,
    Location,
    Member,
    Payment,
    Seat,
    Subscription,
    UserEntity,
    WaitingListEntry,
)
from src.service.reading_room.domain.entity.fee_type_entity import DUPLICATE_FEE_NAME
from src.service.reading_room.domain.entity.member_entity import build_member_code
from src.service.reading_room.domain.enum.subscription_status import SubscriptionStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore:
    TABLES = (
        'members',
        'locations',
        'seats',
        'subscriptions',
        'payments',
        'waiting',
        'users',
        'inventory',
        'expenses',
        'grievances',
        'fee_types',
        'action_logs',
    )

    def __init__(self) -> None:
        self.members: Dict[int, Member] = {}
        self.locations: Dict[int, Location] = {}
        self.seats: Dict[int, Seat] = {}
        self.subscriptions: Dict[UUID, Subscription] = {}
        self.payments: Dict[UUID, Payment] = {}
        self.waiting: Dict[int, WaitingListEntry] = {}
        self.users: Dict[int, UserEntity] = {}
        self.inventory: Dict[int, InventoryItem] = {}
        self.expenses: Dict[int, Expense] = {}
        self.grievances: Dict[int, Grievance] = {}
        self.fee_types: Dict[int, FeeType] = {}
        self.action_logs: Dict[int, ActionLog] = {}
        self._next_ids: Dict[str, int] = {}

    def next_id(self, table: str) -> int:
        self._next_ids[table] = self._next_ids.get(table, 0) + 1
        return self._next_ids[table]

    def snapshot(self) -> Dict[str, Any]:
        # Entities are replaced through attrs.evolve, never mutated, so shallow copies suffice
        state: Dict[str, Any] = {table: dict(getattr(self, table)) for table in self.TABLES}
        state['_next_ids'] = dict(self._next_ids)
        return state

    def restore(self, state: Dict[str, Any]) -> None:
        for table in self.TABLES:
            setattr(self, table, dict(state[table]))
        self._next_ids = dict(state['_next_ids'])


class InMemoryMemberRepo(IMemberRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _live(self) -> List[Member]:
        return [m for m in self.store.members.values() if not m.is_deleted]

    async def get_by_id(self, *, member_id: int) -> Member | None:
        member = self.store.members.get(member_id)
        return member if member and not member.is_deleted else None

    async def get_by_code(self, *, member_code: str) -> Member | None:
        return next((m for m in self._live() if m.member_code == member_code.upper()), None)

    async def get_by_email(self, *, email: str) -> Member | None:
        return next((m for m in self._live() if m.email == email.strip().lower()), None)

    async def list_all(self) -> List[Member]:
        return sorted(self._live(), key=lambda m: m.id or 0, reverse=True)

    async def create(self, *, member: Member) -> Member:
        member_id = self.store.next_id('members')
        member = attrs.evolve(
            member,
            id=member_id,
            member_code=build_member_code(member_id),
            created_at=_now(),
        )
        self.store.members[member_id] = member
        return member

    async def update(self, *, member: Member) -> Member:
        if member.id not in self.store.members:
            raise NotFoundError('Member not found')
        self.store.members[member.id] = member
        return member

    async def delete(self, *, member_id: int) -> None:
        member = self.store.members.get(member_id)
        if member and not member.is_deleted:
            self.store.members[member_id] = attrs.evolve(member, deleted_at=_now())


class InMemoryLocationRepo(ILocationRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, *, location_id: int) -> Location | None:
        return self.store.locations.get(location_id)

    async def list_active(self) -> List[Location]:
        return sorted(
            (loc for loc in self.store.locations.values() if loc.is_active),
            key=lambda loc: loc.name,
        )

    async def create(self, *, location: Location) -> Location:
        location_id = self.store.next_id('locations')
        location = attrs.evolve(location, id=location_id, created_at=_now())
        self.store.locations[location_id] = location
        return location

    async def update(self, *, location: Location) -> Location:
        assert location.id in self.store.locations
        self.store.locations[location.id] = location
        return location


class InMemorySeatRepo(ISeatRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.locked_ids: List[int] = []

    async def get_by_id(self, *, seat_id: int, for_update: bool = False) -> Seat | None:
        if for_update:
            self.locked_ids.append(seat_id)
        return self.store.seats.get(seat_id)

    async def get_by_number(
        self, *, location_id: int, seat_number: int, for_update: bool = False
    ) -> Seat | None:
        seat = next(
            (
                s
                for s in self.store.seats.values()
                if s.location_id == location_id and s.seat_number == seat_number
            ),
            None,
        )
        if seat is not None and for_update:
            assert seat.id is not None
            self.locked_ids.append(seat.id)
        return seat

    async def list_occupied(self) -> List[Seat]:
        return [s for s in self.store.seats.values() if not s.is_vacant]

    async def list_seat_numbers(self, *, location_id: int) -> set[int]:
        return {s.seat_number for s in self.store.seats.values() if s.location_id == location_id}

    async def create_many(self, *, location_id: int, seat_numbers: List[int]) -> int:
        for number in seat_numbers:
            seat_id = self.store.next_id('seats')
            self.store.seats[seat_id] = Seat(seat_number=number, location_id=location_id, id=seat_id)
        return len(seat_numbers)

    async def update(self, *, seat: Seat) -> Seat:
        if seat.id not in self.store.seats:
            raise NotFoundError('Seat not found')
        self.store.seats[seat.id] = seat
        return seat

    async def list_with_details(self, *, location_id: int | None = None) -> List[Dict[str, Any]]:
        rows = []
        for seat in sorted(self.store.seats.values(), key=lambda s: (s.location_id, s.seat_number)):
            if location_id is not None and seat.location_id != location_id:
                continue
            member = self.store.members.get(seat.assigned_member_id or 0)
            sub = self.store.subscriptions.get(seat.subscription_id) if seat.subscription_id else None
            rows.append(
                {
                    'id': seat.id,
                    'seat_number': seat.seat_number,
                    'location_id': seat.location_id,
                    'status': seat.status,
                    'assigned_member_id': seat.assigned_member_id,
                    'assigned_member_name': member.name if member else None,
                    'subscription_id': str(seat.subscription_id) if seat.subscription_id else None,
                    'subscription_end_date': sub.end_date if sub else None,
                    'subscription_status': sub.status if sub else None,
                }
            )
        return rows


class InMemorySubscriptionRepo(ISubscriptionRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.locked_ids: List[UUID] = []

    async def get_by_id(
        self, *, subscription_id: UUID, for_update: bool = False
    ) -> Subscription | None:
        if for_update:
            self.locked_ids.append(subscription_id)
        return self.store.subscriptions.get(subscription_id)

    async def create(self, *, subscription: Subscription) -> Subscription:
        self.store.subscriptions[subscription.id] = subscription
        return subscription

    async def update(self, *, subscription: Subscription) -> Subscription:
        assert subscription.id in self.store.subscriptions
        self.store.subscriptions[subscription.id] = subscription
        return subscription

    async def list_lapsed_ids(self, *, now: datetime) -> List[UUID]:
        return [
            s.id
            for s in sorted(self.store.subscriptions.values(), key=lambda s: s.end_date)
            if s.status == SubscriptionStatus.ACTIVE and s.end_date < now
        ]

    async def list_active_ids(self, *, subscription_ids: List[UUID]) -> set[UUID]:
        return {
            sub_id
            for sub_id in subscription_ids
            if sub_id in self.store.subscriptions
            and self.store.subscriptions[sub_id].status == SubscriptionStatus.ACTIVE
        }

    async def list_with_details(self, *, member_id: int | None = None) -> List[Dict[str, Any]]:
        rows = []
        subscriptions = sorted(
            self.store.subscriptions.values(),
            key=lambda s: (s.created_at or datetime.min.replace(tzinfo=timezone.utc), str(s.id)),
            reverse=True,
        )
        for sub in subscriptions:
            if member_id is not None and sub.member_id != member_id:
                continue
            member = self.store.members.get(sub.member_id)
            seat = self.store.seats.get(sub.seat_id)
            payments = sorted(
                (p for p in self.store.payments.values() if p.subscription_id == sub.id),
                key=lambda p: p.paid_at,
            )
            rows.append(
                {
                    'id': str(sub.id),
                    'member_id': sub.member_id,
                    'member_name': member.name if member else None,
                    'member_email': member.email if member else None,
                    'seat_id': sub.seat_id,
                    'seat_number': seat.seat_number if seat else None,
                    'location_id': sub.location_id,
                    'start_date': sub.start_date,
                    'end_date': sub.end_date,
                    'duration': sub.duration,
                    'total_amount': sub.total_amount,
                    'status': sub.status,
                    'created_at': sub.created_at,
                    'payments': [
                        {
                            'id': str(p.id),
                            'amount': p.amount,
                            'method': p.method,
                            'upi_code': p.upi_code,
                            'paid_at': p.paid_at,
                        }
                        for p in payments
                    ],
                }
            )
        return rows


class InMemoryPaymentRepo(IPaymentRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, *, payment: Payment) -> Payment:
        self.store.payments[payment.id] = payment
        return payment

    async def list_by_member(self, *, member_id: int) -> List[Payment]:
        subscription_ids = {
            s.id for s in self.store.subscriptions.values() if s.member_id == member_id
        }
        return sorted(
            (p for p in self.store.payments.values() if p.subscription_id in subscription_ids),
            key=lambda p: (p.paid_at, str(p.id)),
            reverse=True,
        )




class InMemoryWaitingListRepo(IWaitingListRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _to_detail(self, entry: WaitingListEntry) -> Dict[str, Any]:
        member = self.store.members[entry.member_id]
        return {
            'id': entry.id,
            'member': {
                'id': member.id,
                'name': member.name,
                'email': member.email,
                'member_code': member.member_code,
            },
            'location_id': entry.location_id,
            'requested_at': entry.requested_at,
            'start_date': entry.start_date,
            'duration': entry.duration,
            'amount': entry.amount,
            'payment_method': entry.payment_method,
        }

    async def get_by_id(self, *, entry_id: int) -> WaitingListEntry | None:
        return self.store.waiting.get(entry_id)

    def _taken(self, member_id: int, location_id: int | None) -> bool:
        return any(
            e.member_id == member_id and e.location_id == location_id
            for e in self.store.waiting.values()
        )

    async def exists(self, *, member_id: int, location_id: int | None) -> bool:
        return self._taken(member_id, location_id)

    async def create(self, *, entry: WaitingListEntry) -> WaitingListEntry:
        # Mirrors the unique (member_id, location_id) index
        if self._taken(entry.member_id, entry.location_id):
            raise ConflictError('Member is already on the waiting list for this location')
        entry_id = self.store.next_id('waiting')
        entry = attrs.evolve(entry, id=entry_id)
        self.store.waiting[entry_id] = entry
        return entry

    async def delete(self, *, entry_id: int) -> None:
        self.store.waiting.pop(entry_id, None)

    async def delete_by_member(self, *, member_id: int) -> int:
        doomed = [i for i, e in self.store.waiting.items() if e.member_id == member_id]
        for entry_id in doomed:
            del self.store.waiting[entry_id]
        return len(doomed)

    async def claim_next(self, *, location_id: int | None) -> WaitingListEntry | None:
        candidates = [
            e
            for e in self.store.waiting.values()
            if location_id is None or e.location_id in (location_id, None)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda e: (e.requested_at, e.id or 0))

    async def get_with_details(self, *, entry_id: int) -> Dict[str, Any] | None:
        entry = self.store.waiting.get(entry_id)
        return self._to_detail(entry) if entry else None

    async def list_with_details(self, *, location_id: int | None = None) -> List[Dict[str, Any]]:
        entries = sorted(
            self.store.waiting.values(), key=lambda e: (e.requested_at, e.id or 0), reverse=True
        )
        return [
            self._to_detail(entry)
            for entry in entries
            if location_id is None or entry.location_id == location_id
        ]


class InMemoryUserRepo(IUserRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        return self.store.users.get(user_id)

    async def get_by_email(self, *, email: str) -> UserEntity | None:
        return next(
            (u for u in self.store.users.values() if u.email == email.strip().lower()), None
        )

    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        user_id = self.store.next_id('users')
        user_entity = attrs.evolve(user_entity, id=user_id)
        self.store.users[user_id] = user_entity
        return user_entity

    async def count(self) -> int:
        return len(self.store.users)

    async def delete(self, *, user_id: int) -> None:
        self.store.users.pop(user_id, None)


def _newest_first(rows, key=lambda row: row.created_at):
    return sorted(rows, key=lambda row: (key(row), row.id or 0), reverse=True)


def _in_scope(location_id: int, location_ids: Optional[List[int]]) -> bool:
    return location_ids is None or location_id in location_ids


class InMemoryInventoryRepo(IInventoryRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, *, item_id: int) -> InventoryItem | None:
        return self.store.inventory.get(item_id)

    async def list_by_locations(
        self, *, location_ids: Optional[List[int]] = None
    ) -> List[InventoryItem]:
        return _newest_first(
            i for i in self.store.inventory.values() if _in_scope(i.location_id, location_ids)
        )

    async def create_many(self, *, items: List[InventoryItem]) -> List[InventoryItem]:
        created = []
        for item in items:
            item_id = self.store.next_id('inventory')
            item = attrs.evolve(item, id=item_id, created_at=_now())
            self.store.inventory[item_id] = item
            created.append(item)
        return created

    async def update(self, *, item: InventoryItem) -> InventoryItem:
        if item.id not in self.store.inventory:
            raise NotFoundError('Inventory item not found')
        self.store.inventory[item.id] = item
        return item

    async def delete(self, *, item_id: int) -> None:
        self.store.inventory.pop(item_id, None)


class InMemoryExpenseRepo(IExpenseRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, *, expense_id: int) -> Expense | None:
        return self.store.expenses.get(expense_id)

    async def list_by_locations(
        self, *, location_ids: Optional[List[int]] = None
    ) -> List[Expense]:
        return _newest_first(
            (e for e in self.store.expenses.values() if _in_scope(e.location_id, location_ids)),
            key=lambda e: e.spent_on,
        )

    async def create(self, *, expense: Expense) -> Expense:
        expense_id = self.store.next_id('expenses')
        expense = attrs.evolve(expense, id=expense_id, created_at=_now())
        self.store.expenses[expense_id] = expense
        return expense

    async def update(self, *, expense: Expense) -> Expense:
        if expense.id not in self.store.expenses:
            raise NotFoundError('Expense not found')
        self.store.expenses[expense.id] = expense
        return expense

    async def delete(self, *, expense_id: int) -> None:
        self.store.expenses.pop(expense_id, None)


class InMemoryGrievanceRepo(IGrievanceRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, *, grievance_id: int) -> Grievance | None:
        return self.store.grievances.get(grievance_id)

    async def list_scoped(
        self,
        *,
        location_ids: Optional[List[int]] = None,
        reported_by: Optional[int] = None,
    ) -> List[Grievance]:
        return _newest_first(
            g
            for g in self.store.grievances.values()
            if _in_scope(g.location_id, location_ids)
            and (reported_by is None or g.reported_by == reported_by)
        )

    async def create(self, *, grievance: Grievance) -> Grievance:
        grievance_id = self.store.next_id('grievances')
        grievance = attrs.evolve(grievance, id=grievance_id, created_at=_now())
        self.store.grievances[grievance_id] = grievance
        return grievance

    async def update(self, *, grievance: Grievance) -> Grievance:
        if grievance.id not in self.store.grievances:
            raise NotFoundError('Grievance not found')
        self.store.grievances[grievance.id] = grievance
        return grievance

    async def delete(self, *, grievance_id: int) -> None:
        self.store.grievances.pop(grievance_id, None)


class InMemoryFeeTypeRepo(IFeeTypeRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _check_unique(self, fee_type: FeeType) -> None:
        # Mirrors the unique index on lower(name)
        for other in self.store.fee_types.values():
            if other.id != fee_type.id and other.name.lower() == fee_type.name.lower():
                raise ConflictError(DUPLICATE_FEE_NAME)

    async def get_by_id(self, *, fee_type_id: int) -> FeeType | None:
        return self.store.fee_types.get(fee_type_id)

    async def get_by_name(self, *, name: str) -> FeeType | None:
        return next(
            (f for f in self.store.fee_types.values() if f.name.lower() == name.strip().lower()),
            None,
        )

    async def list_all(self) -> List[FeeType]:
        return _newest_first(self.store.fee_types.values())

    async def create(self, *, fee_type: FeeType) -> FeeType:
        self._check_unique(fee_type)
        fee_type_id = self.store.next_id('fee_types')
        fee_type = attrs.evolve(fee_type, id=fee_type_id, created_at=_now())
        self.store.fee_types[fee_type_id] = fee_type
        return fee_type

    async def update(self, *, fee_type: FeeType) -> FeeType:
        if fee_type.id not in self.store.fee_types:
            raise NotFoundError('Fee type not found')
        self._check_unique(fee_type)
        self.store.fee_types[fee_type.id] = fee_type
        return fee_type

    async def delete(self, *, fee_type_id: int) -> None:
        self.store.fee_types.pop(fee_type_id, None)


class InMemoryActionLogRepo(IActionLogRepo):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, *, log: ActionLog) -> ActionLog:
        log_id = self.store.next_id('action_logs')
        log = attrs.evolve(log, id=log_id, created_at=_now())
        self.store.action_logs[log_id] = log
        return log

    async def list_recent(
        self, *, entity: Optional[str] = None, limit: int = 100
    ) -> List[ActionLog]:
        logs = _newest_first(
            log for log in self.store.action_logs.values() if entity is None or log.entity == entity
        )
        return logs[:limit]


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()
        self.members = InMemoryMemberRepo(self.store)
        self.locations = InMemoryLocationRepo(self.store)
        self.seats = InMemorySeatRepo(self.store)
        self.subscriptions = InMemorySubscriptionRepo(self.store)
        self.payments = InMemoryPaymentRepo(self.store)
        self.waiting_list = InMemoryWaitingListRepo(self.store)
        self.users = InMemoryUserRepo(self.store)
        self.inventory = InMemoryInventoryRepo(self.store)
        self.expenses = InMemoryExpenseRepo(self.store)
        self.grievances = InMemoryGrievanceRepo(self.store)
        self.fee_types = InMemoryFeeTypeRepo(self.store)
        self.action_logs = InMemoryActionLogRepo(self.store)
        self.commits = 0
        self._committed_state = self.store.snapshot()

    async def __aenter__(self) -> 'FakeUnitOfWork':
        self._committed_state = self.store.snapshot()
        await super().__aenter__()
        return self

    async def _commit(self) -> None:
        self.commits += 1
        self._committed_state = self.store.snapshot()

    async def rollback(self) -> None:
        self.store.restore(self._committed_state)
