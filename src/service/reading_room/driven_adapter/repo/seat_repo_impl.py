import uuid
from typing import Any, Dict, List, Tuple

from sqlalchemy import Select, select
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_seat_repo import ISeatRepo
from src.service.reading_room.domain.entity.seat_entity import Seat
from src.service.reading_room.domain.value_object.seat_occupancy import SeatOccupancy
from src.service.reading_room.driven_adapter.model.member_model import MemberModel
from src.service.reading_room.driven_adapter.model.seat_model import SeatModel
from src.service.reading_room.driven_adapter.model.subscription_model import SubscriptionModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class SeatRepoImpl(SessionRepo, ISeatRepo):
    @staticmethod
    def _to_entity(model: SeatModel) -> Seat:
        occupancy = None
        if model.assigned_member_id is not None:
            occupancy = SeatOccupancy(
                member_id=model.assigned_member_id,
                # SQLAlchemy returns stdlib uuid.UUID, the domain speaks uuid_utils.UUID
                subscription_id=UUID(str(model.subscription_id)) if model.subscription_id else None,
            )
        return Seat(
            id=model.id,
            seat_number=model.seat_number,
            location_id=model.location_id,
            occupancy=occupancy,
        )

    @staticmethod
    def _apply(model: SeatModel, seat: Seat) -> None:
        model.status = seat.status.value
        model.assigned_member_id = seat.assigned_member_id
        model.subscription_id = (
            uuid.UUID(str(seat.subscription_id)) if seat.subscription_id else None
        )

    @staticmethod
    def _locked(stmt: Select[Tuple[SeatModel]], for_update: bool) -> Select[Tuple[SeatModel]]:
        if not for_update:
            return stmt
        # A row already in the identity map must be re-read once the lock is held
        return stmt.with_for_update().execution_options(populate_existing=True)

    @Logger.io
    async def get_by_id(self, *, seat_id: int, for_update: bool = False) -> Seat | None:
        async with self._get_session() as session:
            stmt = self._locked(select(SeatModel).where(SeatModel.id == seat_id), for_update)
            model = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_by_number(
        self, *, location_id: int, seat_number: int, for_update: bool = False
    ) -> Seat | None:
        async with self._get_session() as session:
            stmt = select(SeatModel).where(
                SeatModel.location_id == location_id, SeatModel.seat_number == seat_number
            )
            model = (await session.execute(self._locked(stmt, for_update))).scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_occupied(self) -> List[Seat]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatModel)
                .where(SeatModel.assigned_member_id.is_not(None))
                .order_by(SeatModel.location_id, SeatModel.seat_number)
            )
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def list_seat_numbers(self, *, location_id: int) -> set[int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatModel.seat_number).where(SeatModel.location_id == location_id)
            )
            return set(result.scalars())

    @Logger.io
    async def create_many(self, *, location_id: int, seat_numbers: List[int]) -> int:
        async with self._get_session() as session:
            session.add_all(
                SeatModel(seat_number=number, location_id=location_id, status='vacant')
                for number in seat_numbers
            )
            await session.flush()
            return len(seat_numbers)

    @Logger.io
    async def update(self, *, seat: Seat) -> Seat:
        async with self._get_session() as session:
            model = await session.get(SeatModel, seat.id)
            if model is None:
                raise NotFoundError('Seat not found')
            self._apply(model, seat)
            await session.flush()
            return self._to_entity(model)

    @Logger.io
    async def list_with_details(self, *, location_id: int | None = None) -> List[Dict[str, Any]]:
        async with self._get_session() as session:
            stmt = (
                select(
                    SeatModel,
                    MemberModel.name,
                    SubscriptionModel.end_date,
                    SubscriptionModel.status,
                )
                .outerjoin(MemberModel, SeatModel.assigned_member_id == MemberModel.id)
                .outerjoin(SubscriptionModel, SeatModel.subscription_id == SubscriptionModel.id)
                .order_by(SeatModel.location_id, SeatModel.seat_number)
            )
            if location_id is not None:
                stmt = stmt.where(SeatModel.location_id == location_id)

            result = await session.execute(stmt)
            return [
                {
                    'id': seat.id,
                    'seat_number': seat.seat_number,
                    'location_id': seat.location_id,
                    'status': seat.status,
                    'assigned_member_id': seat.assigned_member_id,
                    'assigned_member_name': member_name,
                    'subscription_id': str(seat.subscription_id) if seat.subscription_id else None,
                    'subscription_end_date': end_date,
                    'subscription_status': subscription_status,
                }
                for seat, member_name, end_date, subscription_status in result.all()
            ]
