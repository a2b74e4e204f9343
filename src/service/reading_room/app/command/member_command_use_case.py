from typing import Optional

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.action_log_recorder import ActionLogRecorder
from src.service.reading_room.domain.entity.action_log_entity import SYSTEM_ACTOR
from src.service.reading_room.domain.entity.member_entity import Member
from src.service.reading_room.domain.enum.log_action import LogAction
from src.service.reading_room.domain.enum.user_role import UserRole


class MemberCommandUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow
        self.audit = ActionLogRecorder(uow)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def create(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        address: str = '',
        exam_prep: Optional[str] = None,
    ) -> Member:
        member = Member.create(
            name=name, email=email, phone=phone, address=address, exam_prep=exam_prep
        )
        async with self.uow:
            if await self.uow.members.get_by_email(email=member.email):
                raise ConflictError('A member with this email already exists')
            member = await self.uow.members.create(member=member)
            await self.uow.commit()

        Logger.base.info(f'👤 [MEMBER] Registered {member.member_code}')
        return member

    @Logger.io
    async def update(
        self,
        *,
        member_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        exam_prep: Optional[str] = None,
        performed_by: str = SYSTEM_ACTOR,
    ) -> Member:
        async with self.uow:
            member = await self.uow.members.get_by_id(member_id=member_id)
            if not member:
                raise NotFoundError('Member not found')

            updated = member.update(
                name=name,
                email=email.strip().lower() if email else None,
                phone=phone,
                address=address,
                exam_prep=exam_prep,
            )
            if updated.email != member.email:
                other = await self.uow.members.get_by_email(email=updated.email)
                if other and other.id != member_id:
                    raise ConflictError('A member with this email already exists')

            updated = await self.uow.members.update(member=updated)
            await self.audit.record(
                action=LogAction.UPDATE,
                entity='Member',
                entity_id=member_id,
                details=f'Updated member: {updated.name} ({updated.member_code})',
                performed_by=performed_by,
            )
            await self.uow.commit()

        return updated

    @Logger.io
    async def delete(self, *, member_id: int, performed_by: str = SYSTEM_ACTOR) -> None:
        """
        Soft delete: subscriptions and payments stay for the billing history.
        Waiting entries and the member's own login go with the member.
        """
        async with self.uow:
            member = await self.uow.members.get_by_id(member_id=member_id)
            if not member:
                raise NotFoundError('Member not found')

            if any(
                seat.assigned_member_id == member_id
                for seat in await self.uow.seats.list_occupied()
            ):
                raise ConflictError('Member still holds a seat, terminate the subscription first')

            dropped = await self.uow.waiting_list.delete_by_member(member_id=member_id)
            await self.uow.members.delete(member_id=member_id)
            login = await self.uow.users.get_by_email(email=member.email)
            if login and login.role == UserRole.MEMBER:
                assert login.id is not None
                await self.uow.users.delete(user_id=login.id)
            await self.audit.record(
                action=LogAction.DELETE,
                entity='Member',
                entity_id=member_id,
                details=f'Deleted member: {member.name} ({member.member_code})',
                performed_by=performed_by,
            )
            await self.uow.commit()

        Logger.base.info(
            f'🗑️ [MEMBER] Deleted {member.member_code}, dropped {dropped} waiting entries'
        )
