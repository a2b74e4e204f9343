"""
HTTP tests for the reading room API

Test Coverage:
1. Cookie login and role checks
2. Location, member and seat endpoints
3. Enroll, queue, terminate and hand-over through the API
4. Waiting list status codes (400 / 404 / 409) and the created entry body
5. Payment history with staff and self access
6. Member delete keeps billing history
7. Inventory, grievance, fee type and action log endpoints
"""

from datetime import datetime, timezone

from fastapi.testclient import TestClient
import pytest

from src.platform.config.core_setting import settings
from src.service.reading_room.domain.enum.user_role import UserRole


pytestmark = pytest.mark.unit


ADMIN_EMAIL = 'admin@example.com'
MANAGER_EMAIL = 'manager@example.com'


def _create_location(client: TestClient, *, total_seats: int = 3) -> dict:
    response = client.post(
        '/api/location',
        json={'name': 'Main Branch', 'address': '12 MG Road', 'total_seats': total_seats},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _create_member(client: TestClient, *, name: str, email: str) -> dict:
    response = client.post(
        '/api/member', json={'name': name, 'email': email, 'phone': '9876543210'}
    )
    assert response.status_code == 201, response.text
    return response.json()


def _enroll(client: TestClient, *, member_id: int, location_id: int, seat_number: int = 1):
    return client.post(
        '/api/subscription',
        json={
            'member_id': member_id,
            'location_id': location_id,
            'seat_number': seat_number,
            'start_date': datetime.now(timezone.utc).isoformat(),
            'duration': '1 month',
            'amount': 1500,
            'payment_method': 'UPI',
            'upi_code': 'UPI-REF-1',
        },
    )


class TestAuth:
    def test_login_sets_cookie_and_returns_user(self, client, create_user):
        create_user(email=ADMIN_EMAIL, role=UserRole.ADMIN)

        response = client.post(
            '/api/user/login', json={'email': ADMIN_EMAIL, 'password': 'P@ssw0rd'}
        )

        assert response.status_code == 200
        assert response.json()['role'] == 'Admin'
        assert settings.AUTH_COOKIE_NAME in response.cookies

        me = client.get('/api/user')
        assert me.status_code == 200
        assert me.json()['email'] == ADMIN_EMAIL

    def test_wrong_password_is_rejected(self, client, create_user):
        create_user(email=ADMIN_EMAIL, role=UserRole.ADMIN)

        response = client.post(
            '/api/user/login', json={'email': ADMIN_EMAIL, 'password': 'wrong-password'}
        )

        assert response.status_code == 400
        assert response.json()['detail'] == 'LOGIN_BAD_CREDENTIALS'

    def test_requests_without_cookie_are_unauthorized(self, client):
        assert client.get('/api/seat').status_code == 401

    def test_only_admin_creates_users(self, client, login):
        login(email=MANAGER_EMAIL, role=UserRole.MANAGER)

        response = client.post(
            '/api/user',
            json={'email': 'new@example.com', 'password': 'P@ssw0rd', 'name': 'New'},
        )

        assert response.status_code == 403

    def test_admin_creates_manager(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)

        response = client.post(
            '/api/user',
            json={
                'email': MANAGER_EMAIL,
                'password': 'P@ssw0rd',
                'name': 'Manager',
                'role': 'Manager',
            },
        )

        assert response.status_code == 201, response.text
        assert response.json()['role'] == 'Manager'


class TestSeatLifecycle:
    def test_enroll_queue_terminate_hands_seat_over(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client)
        first = _create_member(client, name='First', email='first@example.com')
        second = _create_member(client, name='Second', email='second@example.com')

        # Vacant seat: subscription created
        enrolled = _enroll(client, member_id=first['id'], location_id=location['id'])
        assert enrolled.status_code == 201, enrolled.text
        body = enrolled.json()
        assert body['message'] == 'Subscription created'
        subscription_id = body['subscription']['id']
        assert body['payment']['subscription_id'] == subscription_id

        # Held seat: second member queued
        queued = _enroll(client, member_id=second['id'], location_id=location['id'])
        assert queued.status_code == 201
        assert queued.json()['message'] == 'Seat occupied, added to waiting list'
        assert queued.json()['waiting_entry_id'] is not None

        # Terminate: seat goes to the queued member, no subscription is opened for them
        ended = client.put(f'/api/subscription/{subscription_id}')
        assert ended.status_code == 200
        assert ended.json() == {'message': 'Subscription ended'}

        seats = client.get('/api/seat', params={'location_id': location['id']}).json()
        seat_one = next(s for s in seats if s['seat_number'] == 1)
        assert seat_one['status'] == 'occupied'
        assert seat_one['assigned_member_id'] == second['id']
        assert seat_one['subscription_id'] is None
        assert seat_one['subscription_status'] is None
        assert client.get('/api/waiting').json() == []

        history = client.get(f'/api/subscription/member/{first["id"]}').json()
        assert [s['status'] for s in history] == ['expired']

    def test_terminate_unknown_subscription_is_not_found(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)

        response = client.put('/api/subscription/01930f2c-7a5e-7cc4-a1b2-123456789abc')

        assert response.status_code == 404
        assert response.json() == {'detail': 'Subscription not found'}

    def test_seats_listed_in_number_order(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client, total_seats=3)

        seats = client.get('/api/seat', params={'location_id': location['id']}).json()

        assert [s['seat_number'] for s in seats] == [1, 2, 3]
        assert all(s['status'] == 'vacant' for s in seats)

    def test_manager_cannot_enroll_outside_assigned_location(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client)
        member = _create_member(client, name='Ravi', email='ravi@example.com')

        login(email=MANAGER_EMAIL, role=UserRole.MANAGER, location_ids=[location['id'] + 1])
        response = _enroll(client, member_id=member['id'], location_id=location['id'])

        assert response.status_code == 403


class TestWaitingListApi:
    def test_status_codes(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client)
        member = _create_member(client, name='Ravi', email='ravi@example.com')

        missing_member = client.post('/api/waiting', json={'location_id': location['id']})
        unknown_member = client.post(
            '/api/waiting', json={'member_id': 999, 'location_id': location['id']}
        )
        created = client.post(
            '/api/waiting', json={'member_id': member['id'], 'location_id': location['id']}
        )
        duplicate = client.post(
            '/api/waiting', json={'member_id': member['id'], 'location_id': location['id']}
        )

        assert missing_member.status_code == 400
        assert unknown_member.status_code == 404
        assert created.status_code == 201
        assert created.json()['member'] == {
            'id': member['id'],
            'name': 'Ravi',
            'email': 'ravi@example.com',
            'member_code': member['member_code'],
        }
        assert created.json()['location_id'] == location['id']
        assert duplicate.status_code == 409

        entries = client.get('/api/waiting').json()
        assert [e['member']['email'] for e in entries] == ['ravi@example.com']

        removed = client.delete(f'/api/waiting/{created.json()["id"]}')
        assert removed.status_code == 200
        assert client.get('/api/waiting').json() == []


class TestPaymentHistoryApi:
    def test_member_sees_own_history_but_not_others(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client)
        own = _create_member(client, name='Own', email='own@example.com')
        other = _create_member(client, name='Other', email='other@example.com')
        _enroll(client, member_id=own['id'], location_id=location['id'])

        login(email='own@example.com', role=UserRole.MEMBER)
        mine = client.get(f'/api/payment/member/{own["member_code"]}')
        theirs = client.get(f'/api/payment/member/{other["member_code"]}')

        assert mine.status_code == 200, mine.text
        assert mine.json()['summary'] == {'total_payments': 1, 'total_paid': 1500}
        assert mine.json()['payments'][0]['method'] == 'UPI'
        assert theirs.status_code == 403


class TestMemberDeleteApi:
    def test_delete_keeps_subscriptions_and_payments(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client)
        member = _create_member(client, name='Leaving', email='leaving@example.com')
        subscription_id = _enroll(
            client, member_id=member['id'], location_id=location['id']
        ).json()['subscription']['id']

        still_seated = client.delete(f'/api/member/{member["id"]}')
        client.put(f'/api/subscription/{subscription_id}')
        deleted = client.delete(f'/api/member/{member["id"]}')

        assert still_seated.status_code == 409
        assert deleted.status_code == 200
        assert client.get(f'/api/member/{member["id"]}').status_code == 404
        [row] = client.get('/api/subscription').json()
        assert row['id'] == subscription_id
        assert row['status'] == 'expired'
        assert row['member_name'] == 'Leaving'
        assert [p['amount'] for p in row['payments']] == [1500]

    def test_email_of_deleted_member_can_register_again(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        member = _create_member(client, name='Ravi', email='ravi@example.com')
        client.delete(f'/api/member/{member["id"]}')

        again = _create_member(client, name='Ravi', email='ravi@example.com')

        assert again['id'] != member['id']


class TestOperationsApi:
    def test_manager_inventory_is_location_scoped(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        main = _create_location(client)
        annex = _create_location(client)

        login(email=MANAGER_EMAIL, role=UserRole.MANAGER, location_ids=[main['id']])
        own = client.post(
            '/api/inventory', json={'name': 'Fan', 'category': 'Fan', 'location_id': main['id']}
        )
        foreign = client.post(
            '/api/inventory', json={'name': 'Fan', 'category': 'Fan', 'location_id': annex['id']}
        )
        bulk = client.post(
            '/api/inventory/bulk',
            json=[
                {'name': 'AC', 'category': 'AC', 'location_id': main['id']},
                {'name': 'CCTV', 'category': 'CCTV', 'location_id': main['id']},
            ],
        )

        assert own.status_code == 201, own.text
        assert foreign.status_code == 403
        assert bulk.status_code == 201, bulk.text
        assert len(client.get('/api/inventory').json()) == 3

    def test_members_see_only_their_own_grievances(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        location = _create_location(client)

        login(email='first@example.com', role=UserRole.MEMBER)
        first = client.post(
            '/api/grievance',
            json={
                'title': 'Noisy',
                'description': 'Loud talking near seat 3',
                'category': 'Noise',
                'location_id': location['id'],
            },
        )
        assert first.status_code == 201, first.text
        login(email='second@example.com', role=UserRole.MEMBER)

        listed = client.get('/api/grievance')
        opened = client.get(f'/api/grievance/{first.json()["id"]}')
        reviewed = client.put(f'/api/grievance/{first.json()["id"]}', json={'status': 'Resolved'})

        assert listed.json() == []
        assert opened.status_code == 403
        assert reviewed.status_code == 403

    def test_fee_type_name_conflict_and_admin_only_log(self, client, login):
        login(email=ADMIN_EMAIL, role=UserRole.ADMIN)
        fee = {'name': 'Monthly', 'amount': 1200, 'duration': '1 month'}

        created = client.post('/api/fee', json=fee)
        duplicate = client.post('/api/fee', json={**fee, 'name': 'MONTHLY'})
        logs = client.get('/api/log', params={'entity': 'FeeType'})

        assert created.status_code == 201
        assert duplicate.status_code == 409
        assert [(log['action'], log['performed_by']) for log in logs.json()] == [
            ('CREATE', ADMIN_EMAIL)
        ]

        login(email=MANAGER_EMAIL, role=UserRole.MANAGER)
        assert client.get('/api/log').status_code == 403
