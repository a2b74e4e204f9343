from typing import List

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.entity.member_entity import Member


class MemberQueryUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def list_members(self) -> List[Member]:
        async with self.uow:
            return await self.uow.members.list_all()

    @Logger.io
    async def get_member(self, *, member_id: int) -> Member:
        async with self.uow:
            member = await self.uow.members.get_by_id(member_id=member_id)
        if not member:
            raise NotFoundError('Member not found')
        return member
