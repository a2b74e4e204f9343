"""
Unit tests for member, location and user commands
"""

import pytest

from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.service.reading_room.app.command.location_command_use_case import (
    LocationCommandUseCase,
)
from src.service.reading_room.app.command.member_command_use_case import MemberCommandUseCase
from src.service.reading_room.app.command.user_command_use_case import UserCommandUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.log_action import LogAction
from src.service.reading_room.domain.enum.subscription_status import SubscriptionStatus
from src.service.reading_room.domain.enum.user_role import UserRole
from src.service.reading_room.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from test.service.reading_room.builders import (
    NOW,
    add_location,
    add_member,
    add_subscription,
    add_waiting,
    seat_at,
)
from test.service.reading_room.fakes import FakeUnitOfWork


pytestmark = pytest.mark.unit


class TestLocationCommands:
    def setup_method(self):
        self.uow = FakeUnitOfWork()
        self.use_case = LocationCommandUseCase(uow=self.uow)

    @pytest.mark.asyncio
    async def test_create_location_creates_numbered_seats(self):
        location = await self.use_case.create(name='Main', address='12 MG Road', total_seats=4)

        numbers = await self.uow.seats.list_seat_numbers(location_id=location.id)
        assert numbers == {1, 2, 3, 4}

    @pytest.mark.asyncio
    async def test_growing_adds_seats_and_shrinking_keeps_them(self):
        location = await self.use_case.create(name='Main', address='12 MG Road', total_seats=2)

        await self.use_case.update(location_id=location.id, total_seats=5)
        assert await self.uow.seats.list_seat_numbers(location_id=location.id) == {1, 2, 3, 4, 5}

        await self.use_case.update(location_id=location.id, total_seats=1)
        assert await self.uow.seats.list_seat_numbers(location_id=location.id) == {1, 2, 3, 4, 5}

    @pytest.mark.asyncio
    async def test_deactivate_hides_location(self):
        location = await self.use_case.create(name='Main', address='12 MG Road', total_seats=1)

        await self.use_case.deactivate(location_id=location.id)

        assert await self.uow.locations.list_active() == []

    @pytest.mark.asyncio
    async def test_update_unknown_location(self):
        with pytest.raises(NotFoundError):
            await self.use_case.update(location_id=7, name='Nope')


class TestMemberCommands:
    def setup_method(self):
        self.uow = FakeUnitOfWork()
        self.use_case = MemberCommandUseCase(uow=self.uow)

    @pytest.mark.asyncio
    async def test_create_assigns_member_code(self):
        member = await self.use_case.create(
            name='Asha', email='Asha@Example.com', phone='9999', exam_prep='UPSC'
        )

        assert member.member_code == f'MEM{member.id:05d}'
        assert member.email == 'asha@example.com'

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self):
        await self.use_case.create(name='Asha', email='asha@example.com', phone='9999')

        with pytest.raises(ConflictError):
            await self.use_case.create(name='Other', email='ASHA@example.com', phone='1111')

    @pytest.mark.asyncio
    async def test_update_to_taken_email_conflicts(self):
        add_member(self.uow, email='taken@example.com')
        member = add_member(self.uow)

        with pytest.raises(ConflictError):
            await self.use_case.update(member_id=member.id, email='taken@example.com')

    @pytest.mark.asyncio
    async def test_delete_refused_while_member_holds_a_seat(self):
        location = add_location(self.uow)
        member = add_member(self.uow)
        add_subscription(
            self.uow, member=member, seat=seat_at(self.uow, location_id=location.id, seat_number=1)
        )

        with pytest.raises(ConflictError):
            await self.use_case.delete(member_id=member.id)

        assert member.id in self.uow.store.members

    @pytest.mark.asyncio
    async def test_delete_keeps_subscriptions_and_payments(self):
        # Given: a member with an ended subscription and its payment
        location = add_location(self.uow)
        member = add_member(self.uow)
        subscription = add_subscription(
            self.uow,
            member=member,
            seat=seat_at(self.uow, location_id=location.id, seat_number=1),
            status=SubscriptionStatus.EXPIRED,
            occupy_seat=False,
        )

        # When
        await self.use_case.delete(member_id=member.id, performed_by='admin@example.com')

        # Then: the member is gone from every lookup, the billing history is not
        assert await self.uow.members.get_by_id(member_id=member.id) is None
        assert await self.uow.members.list_all() == []
        assert self.uow.store.members[member.id].is_deleted
        assert subscription.id in self.uow.store.subscriptions
        assert [p.subscription_id for p in self.uow.store.payments.values()] == [subscription.id]
        rows = await self.uow.subscriptions.list_with_details()
        assert [row['member_name'] for row in rows] == [member.name]

    @pytest.mark.asyncio
    async def test_delete_drops_waiting_entries_and_member_login(self):
        location = add_location(self.uow)
        member = add_member(self.uow, email='ravi@example.com')
        add_waiting(self.uow, member=member, location_id=location.id, requested_at=NOW)
        self.uow.store.users[1] = UserEntity(email='ravi@example.com', id=1, role=UserRole.MEMBER)
        self.uow.store.users[2] = UserEntity(email='boss@example.com', id=2, role=UserRole.ADMIN)

        await self.use_case.delete(member_id=member.id, performed_by='boss@example.com')

        assert self.uow.store.waiting == {}
        assert list(self.uow.store.users) == [2]
        [log] = self.uow.store.action_logs.values()
        assert (log.action, log.entity, log.entity_id) == (
            LogAction.DELETE,
            'Member',
            str(member.id),
        )
        assert log.performed_by == 'boss@example.com'

    @pytest.mark.asyncio
    async def test_deleted_member_email_can_register_again(self):
        member = add_member(self.uow, email='ravi@example.com')
        await self.use_case.delete(member_id=member.id)

        again = await self.use_case.create(
            name='Ravi Kumar', email='ravi@example.com', phone='9876543210'
        )

        assert again.id != member.id
        assert await self.uow.members.get_by_email(email='ravi@example.com') == again

    @pytest.mark.asyncio
    async def test_delete_twice_is_not_found(self):
        member = add_member(self.uow)
        await self.use_case.delete(member_id=member.id)

        with pytest.raises(NotFoundError):
            await self.use_case.delete(member_id=member.id)


class TestUserCommands:
    def setup_method(self):
        self.uow = FakeUnitOfWork()
        self.hasher = BcryptPasswordHasher(rounds=4)
        self.use_case = UserCommandUseCase(uow=self.uow, password_hasher=self.hasher)

    @pytest.mark.asyncio
    async def test_create_manager_with_location_scope(self):
        location = add_location(self.uow)

        user = await self.use_case.create_user(
            email='Manager@Example.com',
            password='P@ssw0rd',
            name='Manager',
            role='Manager',
            location_ids=[location.id],
        )

        assert user.role == UserRole.MANAGER
        assert user.email == 'manager@example.com'
        assert user.location_ids == [location.id]
        assert user.verify_password('P@ssw0rd', self.hasher)

    @pytest.mark.asyncio
    async def test_unknown_location_in_scope_is_rejected(self):
        with pytest.raises(DomainError):
            await self.use_case.create_user(
                email='m@example.com',
                password='P@ssw0rd',
                name='Manager',
                role='Manager',
                location_ids=[42],
            )

    @pytest.mark.asyncio
    async def test_short_password_is_rejected(self):
        with pytest.raises(DomainError):
            await self.use_case.create_user(
                email='m@example.com', password='short', name='M', role='Member'
            )

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self):
        await self.use_case.create_user(
            email='m@example.com', password='P@ssw0rd', name='M', role='Member'
        )

        with pytest.raises(ConflictError):
            await self.use_case.create_user(
                email='m@example.com', password='P@ssw0rd', name='M', role='Member'
            )

    @pytest.mark.asyncio
    async def test_seed_admin_only_when_no_user_exists(self):
        admin = await self.use_case.seed_admin(
            email='admin@example.com', password='admin1234', name='Admin'
        )
        again = await self.use_case.seed_admin(
            email='other@example.com', password='admin1234', name='Admin'
        )

        assert admin is not None and admin.role == UserRole.ADMIN
        assert again is None
        assert await self.uow.users.count() == 1

    @pytest.mark.asyncio
    async def test_create_records_who_created_the_account(self):
        user = await self.use_case.create_user(
            email='m@example.com',
            password='P@ssw0rd',
            name='M',
            role='Member',
            performed_by='admin@example.com',
        )

        [log] = self.uow.store.action_logs.values()
        assert (log.action, log.entity, log.entity_id) == (LogAction.CREATE, 'User', str(user.id))
        assert log.performed_by == 'admin@example.com'
