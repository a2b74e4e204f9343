from typing import Any, Dict, List

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_waiting_list_repo import IWaitingListRepo
from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry
from src.service.reading_room.driven_adapter.model.member_model import MemberModel
from src.service.reading_room.driven_adapter.model.waiting_list_model import WaitingListModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class WaitingListRepoImpl(SessionRepo, IWaitingListRepo):
    @staticmethod
    def _to_entity(model: WaitingListModel) -> WaitingListEntry:
        return WaitingListEntry(
            id=model.id,
            member_id=model.member_id,
            location_id=model.location_id,
            requested_at=model.requested_at,
            start_date=model.start_date,
            duration=model.duration,
            amount=model.amount,
            payment_method=model.payment_method,
            upi_code=model.upi_code,
            paid_at=model.paid_at,
        )

    @staticmethod
    def _to_detail(entry: WaitingListModel, member: MemberModel) -> Dict[str, Any]:
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

    @staticmethod
    def _location_matches(location_id: int | None):
        if location_id is None:
            return WaitingListModel.location_id.is_(None)
        return WaitingListModel.location_id == location_id

    @Logger.io
    async def get_by_id(self, *, entry_id: int) -> WaitingListEntry | None:
        async with self._get_session() as session:
            model = await session.get(WaitingListModel, entry_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def exists(self, *, member_id: int, location_id: int | None) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    exists().where(
                        WaitingListModel.member_id == member_id,
                        self._location_matches(location_id),
                    )
                )
            )
            return bool(result.scalar())

    @Logger.io
    async def create(self, *, entry: WaitingListEntry) -> WaitingListEntry:
        async with self._get_session() as session:
            model = WaitingListModel(
                member_id=entry.member_id,
                location_id=entry.location_id,
                requested_at=entry.requested_at,
                start_date=entry.start_date,
                duration=entry.duration,
                amount=entry.amount,
                payment_method=entry.payment_method,
                upi_code=entry.upi_code,
                paid_at=entry.paid_at,
            )
            session.add(model)
            try:
                await session.flush()
            except IntegrityError as e:
                # Lost the race against a concurrent add for the same member and location
                if 'uq_waiting_list_member_location' in str(e):
                    raise ConflictError(
                        'Member is already on the waiting list for this location'
                    ) from e
                raise
            return self._to_entity(model)

    @Logger.io
    async def delete(self, *, entry_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(WaitingListModel).where(WaitingListModel.id == entry_id))

    @Logger.io
    async def delete_by_member(self, *, member_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                delete(WaitingListModel).where(WaitingListModel.member_id == member_id)
            )
            return result.rowcount or 0

    @Logger.io
    async def claim_next(self, *, location_id: int | None) -> WaitingListEntry | None:
        async with self._get_session() as session:
            stmt = (
                select(WaitingListModel)
                .order_by(WaitingListModel.requested_at, WaitingListModel.id)
                .limit(1)
                # A concurrent dispatch holding the head moves on to the next entry
                .with_for_update(skip_locked=True)
            )
            if location_id is not None:
                stmt = stmt.where(
                    or_(
                        WaitingListModel.location_id == location_id,
                        WaitingListModel.location_id.is_(None),
                    )
                )

            model = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_with_details(self, *, entry_id: int) -> Dict[str, Any] | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(WaitingListModel, MemberModel)
                .join(MemberModel, WaitingListModel.member_id == MemberModel.id)
                .where(WaitingListModel.id == entry_id)
            )
            row = result.one_or_none()
            return self._to_detail(*row) if row else None

    @Logger.io
    async def list_with_details(self, *, location_id: int | None = None) -> List[Dict[str, Any]]:
        async with self._get_session() as session:
            stmt = (
                select(WaitingListModel, MemberModel)
                .join(MemberModel, WaitingListModel.member_id == MemberModel.id)
                .order_by(WaitingListModel.requested_at.desc(), WaitingListModel.id.desc())
            )
            if location_id is not None:
                stmt = stmt.where(WaitingListModel.location_id == location_id)

            result = await session.execute(stmt)
            return [self._to_detail(entry, member) for entry, member in result.all()]
