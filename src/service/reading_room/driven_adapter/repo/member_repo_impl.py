from typing import List

from sqlalchemy import func, select, update

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_member_repo import IMemberRepo
from src.service.reading_room.domain.entity.member_entity import Member, build_member_code
from src.service.reading_room.driven_adapter.model.member_model import MemberModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class MemberRepoImpl(SessionRepo, IMemberRepo):
    @staticmethod
    def _to_entity(model: MemberModel) -> Member:
        return Member(
            id=model.id,
            member_code=model.member_code,
            name=model.name,
            email=model.email,
            phone=model.phone,
            address=model.address,
            exam_prep=model.exam_prep,
            created_at=model.created_at,
            deleted_at=model.deleted_at,
        )

    @staticmethod
    def _live():
        return select(MemberModel).where(MemberModel.deleted_at.is_(None))

    @Logger.io
    async def get_by_id(self, *, member_id: int) -> Member | None:
        async with self._get_session() as session:
            result = await session.execute(self._live().where(MemberModel.id == member_id))
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_by_code(self, *, member_code: str) -> Member | None:
        async with self._get_session() as session:
            result = await session.execute(
                self._live().where(MemberModel.member_code == member_code.upper())
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_by_email(self, *, email: str) -> Member | None:
        async with self._get_session() as session:
            result = await session.execute(
                self._live().where(MemberModel.email == email.lower())
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_all(self) -> List[Member]:
        async with self._get_session() as session:
            result = await session.execute(self._live().order_by(MemberModel.id.desc()))
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def create(self, *, member: Member) -> Member:
        async with self._get_session() as session:
            model = MemberModel(
                name=member.name,
                email=member.email,
                phone=member.phone,
                address=member.address,
                exam_prep=member.exam_prep,
            )
            session.add(model)
            await session.flush()
            model.member_code = build_member_code(model.id)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def update(self, *, member: Member) -> Member:
        async with self._get_session() as session:
            model = await session.get(MemberModel, member.id)
            if model is None:
                raise NotFoundError('Member not found')
            model.name = member.name
            model.email = member.email
            model.phone = member.phone
            model.address = member.address
            model.exam_prep = member.exam_prep
            await session.flush()
            return self._to_entity(model)

    @Logger.io
    async def delete(self, *, member_id: int) -> None:
        async with self._get_session() as session:
            # Subscriptions and payments keep pointing at the row
            await session.execute(
                update(MemberModel)
                .where(MemberModel.id == member_id, MemberModel.deleted_at.is_(None))
                .values(deleted_at=func.now())
            )
