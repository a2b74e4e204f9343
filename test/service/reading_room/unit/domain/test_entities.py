from datetime import datetime, timedelta, timezone

import pytest
import uuid_utils

from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.service.reading_room.domain.entity import (
    Expense,
    FeeType,
    Grievance,
    InventoryItem,
    Location,
    Member,
    Payment,
    UserEntity,
    WaitingListEntry,
    build_member_code,
)
from src.service.reading_room.domain.enum.grievance_enums import GrievanceStatus
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.domain.enum.user_role import UserRole
from src.service.reading_room.domain.value_object.enrollment_terms import EnrollmentTerms


pytestmark = pytest.mark.unit


class TestMember:
    def test_member_code_format(self):
        assert build_member_code(1) == 'MEM00001'
        assert build_member_code(12345) == 'MEM12345'

    def test_create_normalizes_email(self):
        member = Member.create(name=' Ravi ', email=' Ravi@Example.COM ', phone='98765')

        assert member.name == 'Ravi'
        assert member.email == 'ravi@example.com'

    def test_update_ignores_missing_fields(self):
        member = Member.create(name='Ravi', email='ravi@example.com', phone='98765')

        updated = member.update(name=None, phone='11111')

        assert updated.name == 'Ravi'
        assert updated.phone == '11111'

    def test_blank_name_is_rejected(self):
        with pytest.raises(DomainError):
            Member.create(name='  ', email='ravi@example.com', phone='98765')


class TestLocation:
    def test_missing_seat_numbers_only_grows(self):
        location = Location.create(name='Main', address='Road 1', total_seats=5)

        assert location.missing_seat_numbers({1, 2, 3}) == [4, 5]
        assert location.missing_seat_numbers({1, 2, 3, 4, 5, 6}) == []

    def test_total_seats_must_be_positive(self):
        with pytest.raises(DomainError):
            Location.create(name='Main', address='Road 1', total_seats=0)


class TestPayment:
    def test_upi_code_is_dropped_for_cash(self):
        payment = Payment.create(
            id=uuid_utils.uuid7(),
            subscription_id=uuid_utils.uuid7(),
            amount=500,
            method='cash',
            paid_at=datetime(2025, 1, 1),
            upi_code='IGNORED',
        )

        assert payment.method == PaymentMethod.CASH
        assert payment.upi_code is None
        assert payment.paid_at.tzinfo is timezone.utc

    def test_negative_amount_is_rejected(self):
        with pytest.raises(DomainError):
            Payment.create(
                id=uuid_utils.uuid7(),
                subscription_id=uuid_utils.uuid7(),
                amount=-1,
                method='UPI',
                paid_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            )


class TestWaitingListEntry:
    def test_member_id_is_required(self):
        with pytest.raises(DomainError):
            WaitingListEntry.create(member_id=None)

    def test_terms_are_normalized(self):
        entry = WaitingListEntry.create(
            member_id=1, location_id=2, duration='1 Months', amount=900, payment_method='UPI'
        )

        assert entry.duration == '1 month'
        assert entry.payment_method == 'UPI'
        assert entry.has_complete_terms

    def test_entry_without_amount_has_incomplete_terms(self):
        entry = WaitingListEntry.create(member_id=1, duration='30 days')

        assert not entry.has_complete_terms

    def test_invalid_payment_method_is_rejected(self):
        with pytest.raises(DomainError) as exc_info:
            WaitingListEntry.create(member_id=1, payment_method='card')

        # The enum lookup failure stays out of the traceback
        assert exc_info.value.__suppress_context__
        assert exc_info.value.__cause__ is None


class TestEnrollmentTerms:
    def test_invalid_payment_method_is_rejected_without_chained_error(self):
        with pytest.raises(DomainError) as exc_info:
            EnrollmentTerms.build(
                start_date=datetime(2025, 3, 1, tzinfo=timezone.utc),
                duration='1 month',
                amount=1500,
                payment_method='card',
                paid_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
            )

        assert exc_info.value.__suppress_context__
        assert exc_info.value.__cause__ is None

    def test_upi_code_only_kept_for_upi(self):
        terms = EnrollmentTerms.build(
            start_date=datetime(2025, 3, 1, tzinfo=timezone.utc),
            duration='1 month',
            amount=1500,
            payment_method='cash',
            paid_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
            upi_code='UPI-1',
        )

        assert terms.upi_code is None


class TestUserEntity:
    def test_manager_scope(self):
        manager = UserEntity(email='m@example.com', role=UserRole.MANAGER, location_ids=[1])
        unscoped = UserEntity(email='u@example.com', role=UserRole.MANAGER)

        assert manager.is_staff
        assert manager.can_access_location(1)
        assert not manager.can_access_location(2)
        assert unscoped.can_access_location(2)

    def test_member_is_not_staff(self):
        assert not UserEntity(email='x@example.com', role=UserRole.MEMBER).is_staff

    def test_invalid_role_is_rejected(self):
        with pytest.raises(DomainError):
            UserEntity.validate_role('Owner')

    def test_location_scope(self):
        admin = UserEntity(email='a@example.com', role=UserRole.ADMIN, location_ids=[1])
        manager = UserEntity(email='m@example.com', role=UserRole.MANAGER, location_ids=[1, 2])

        assert admin.location_scope is None
        assert manager.location_scope == [1, 2]

    def test_ensure_location_forbids_other_locations(self):
        manager = UserEntity(email='m@example.com', role=UserRole.MANAGER, location_ids=[1])

        manager.ensure_location(1)
        with pytest.raises(ForbiddenError):
            manager.ensure_location(2)


class TestInventoryItem:
    def test_create_requires_location(self):
        with pytest.raises(DomainError):
            InventoryItem.create(name='Split AC', category='AC', location_id=None)

    def test_quantity_must_be_at_least_one(self):
        item = InventoryItem.create(name='Fan', category='Fan', location_id=1, quantity=4)

        with pytest.raises(DomainError):
            item.update(quantity=0)

    def test_unknown_status_lists_allowed_values(self):
        with pytest.raises(DomainError, match='Must be one of: Working'):
            InventoryItem.create(name='Fan', category='Fan', location_id=1, status='Lost')


class TestExpense:
    def test_amount_must_be_positive(self):
        with pytest.raises(DomainError):
            Expense.create(
                description='Electricity',
                amount=0,
                category='Utilities',
                method='UPI',
                location_id=1,
            )

    def test_spent_on_defaults_to_now(self):
        expense = Expense.create(
            description='Electricity',
            amount=4200,
            category='Utilities',
            method='UPI',
            location_id=1,
        )

        assert datetime.now(timezone.utc) - expense.spent_on < timedelta(minutes=1)


class TestFeeType:
    def test_duration_is_normalized(self):
        fee = FeeType.create(name=' Monthly ', amount=1200, duration='1 Months')

        assert fee.name == 'Monthly'
        assert fee.duration == '1 month'

    def test_invalid_duration_is_rejected(self):
        with pytest.raises(DomainError):
            FeeType.create(name='Odd', amount=100, duration='fortnight')


class TestGrievance:
    def _grievance(self) -> Grievance:
        return Grievance.create(
            title='AC not cooling',
            description='Second floor AC is warm',
            category='AC',
            location_id=1,
            reported_by=7,
        )

    def test_create_requires_location(self):
        with pytest.raises(DomainError, match='location are required'):
            Grievance.create(
                title='Noise', description='Loud', category='Noise', location_id=None, reported_by=7
            )

    def test_closing_stamps_reviewer_and_reopening_clears_it(self):
        now = datetime(2025, 3, 10, tzinfo=timezone.utc)

        resolved = self._grievance().review(
            reviewer_id=2, now=now, status='Resolved', resolution='Gas refilled'
        )
        reopened = resolved.review(reviewer_id=3, now=now, status='In Progress')

        assert resolved.status == GrievanceStatus.RESOLVED
        assert (resolved.resolved_by, resolved.resolved_at) == (2, now)
        assert reopened.resolved_by is None and reopened.resolved_at is None
        assert reopened.resolution == 'Gas refilled'

    def test_reporter_check(self):
        grievance = self._grievance()

        assert grievance.is_reported_by(7)
        assert not grievance.is_reported_by(None)
