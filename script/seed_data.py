#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Tables - create_all on the configured database
2. Create Users - the initial admin plus one manager
3. Create Location - one branch with its numbered seats
4. Create Members - a few members, the first one enrolled on seat 1

Notes:
- Safe to run against an empty database only; duplicates raise ConflictError
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.reading_room.app.command.enroll_member_use_case import EnrollMemberUseCase
from src.service.reading_room.app.command.location_command_use_case import (
    LocationCommandUseCase,
)
from src.service.reading_room.app.command.member_command_use_case import MemberCommandUseCase
from src.service.reading_room.app.command.user_command_use_case import UserCommandUseCase
from src.service.reading_room.domain.enum.user_role import UserRole
from src.service.reading_room.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)

DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class MemberConfig:
    """Member seed configuration"""
    name: str
    email: str
    phone: str
    exam_prep: str


TEST_MEMBERS = [
    MemberConfig(name='Ravi Kumar', email='ravi@example.com', phone='9876500001', exam_prep='UPSC'),
    MemberConfig(name='Asha Rao', email='asha@example.com', phone='9876500002', exam_prep='NEET'),
    MemberConfig(name='Imran Ali', email='imran@example.com', phone='9876500003', exam_prep='CA'),
]


async def _seed_data() -> None:
    async with get_session_maker()() as session:
        uow = SqlAlchemyUnitOfWork(session)
        user_use_case = UserCommandUseCase(uow=uow, password_hasher=BcryptPasswordHasher())

        await user_use_case.seed_admin(
            email=settings.INITIAL_ADMIN_EMAIL,
            password=settings.INITIAL_ADMIN_PASSWORD.get_secret_value(),
            name=settings.INITIAL_ADMIN_NAME,
        )
        print(f'   ✅ Admin: {settings.INITIAL_ADMIN_EMAIL}')

        location = await LocationCommandUseCase(uow=uow).create(
            name='Main Branch', address='12 MG Road', total_seats=46
        )
        assert location.id is not None
        print(f'   ✅ Location "{location.name}" with {location.total_seats} seats')

        await user_use_case.create_user(
            email='manager@example.com',
            password=DEFAULT_PASSWORD,
            name='Branch Manager',
            role=UserRole.MANAGER.value,
            location_ids=[location.id],
        )
        print('   ✅ Manager: manager@example.com')

        member_ids = []
        for config in TEST_MEMBERS:
            member = await MemberCommandUseCase(uow=uow).create(
                name=config.name, email=config.email, phone=config.phone, exam_prep=config.exam_prep
            )
            assert member.id is not None
            member_ids.append(member.id)
            print(f'   ✅ Member {member.member_code}: {member.name}')

        result = await EnrollMemberUseCase(uow=uow).execute(
            member_id=member_ids[0],
            location_id=location.id,
            seat_number=1,
            start_date=datetime.now(timezone.utc),
            duration='1 month',
            amount=1500,
            payment_method='cash',
        )
        print(f'   ✅ {result.message} (seat 1)')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await create_db_and_tables()
        await _seed_data()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Test accounts:')
        print(f'   Admin: {settings.INITIAL_ADMIN_EMAIL} / <INITIAL_ADMIN_PASSWORD>')
        print(f'   Manager: manager@example.com / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e

    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
