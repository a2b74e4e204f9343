import uuid
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_subscription_repo import ISubscriptionRepo
from src.service.reading_room.domain.entity.subscription_entity import Subscription
from src.service.reading_room.domain.enum.subscription_status import SubscriptionStatus
from src.service.reading_room.driven_adapter.model.payment_model import PaymentModel
from src.service.reading_room.driven_adapter.model.subscription_model import SubscriptionModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


def _pg_uuid(value: UUID) -> uuid.UUID:
    return uuid.UUID(str(value))


class SubscriptionRepoImpl(SessionRepo, ISubscriptionRepo):
    @staticmethod
    def _to_entity(model: SubscriptionModel, payment_ids: List[uuid.UUID]) -> Subscription:
        return Subscription(
            id=UUID(str(model.id)),  # Convert stdlib uuid.UUID to uuid_utils.UUID
            member_id=model.member_id,
            seat_id=model.seat_id,
            location_id=model.location_id,
            start_date=model.start_date,
            end_date=model.end_date,
            duration=model.duration,
            total_amount=model.total_amount,
            payment_ids=[UUID(str(payment_id)) for payment_id in payment_ids],
            status=SubscriptionStatus(model.status),
            created_at=model.created_at,
        )

    @Logger.io
    async def get_by_id(
        self, *, subscription_id: UUID, for_update: bool = False
    ) -> Subscription | None:
        async with self._get_session() as session:
            stmt = select(SubscriptionModel).where(
                SubscriptionModel.id == _pg_uuid(subscription_id)
            )
            if for_update:
                stmt = stmt.with_for_update().execution_options(populate_existing=True)
            model = (await session.execute(stmt)).scalar_one_or_none()
            if not model:
                return None

            payment_ids = await session.execute(
                select(PaymentModel.id)
                .where(PaymentModel.subscription_id == model.id)
                .order_by(PaymentModel.paid_at, PaymentModel.id)
            )
            return self._to_entity(model, list(payment_ids.scalars()))

    @Logger.io
    async def create(self, *, subscription: Subscription) -> Subscription:
        """Payments are rows of their own, created separately by the payment repo"""
        async with self._get_session() as session:
            model = SubscriptionModel(
                id=_pg_uuid(subscription.id),
                member_id=subscription.member_id,
                seat_id=subscription.seat_id,
                location_id=subscription.location_id,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
                duration=subscription.duration,
                total_amount=subscription.total_amount,
                status=subscription.status.value,
            )
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model, [_pg_uuid(pid) for pid in subscription.payment_ids])

    @Logger.io
    async def update(self, *, subscription: Subscription) -> Subscription:
        async with self._get_session() as session:
            model = await session.get(SubscriptionModel, _pg_uuid(subscription.id))
            if model is None:
                raise NotFoundError('Subscription not found')
            model.status = subscription.status.value
            model.end_date = subscription.end_date
            model.total_amount = subscription.total_amount
            await session.flush()
            return self._to_entity(model, [_pg_uuid(pid) for pid in subscription.payment_ids])

    @Logger.io
    async def list_lapsed_ids(self, *, now: datetime) -> List[UUID]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SubscriptionModel.id)
                .where(
                    SubscriptionModel.status == SubscriptionStatus.ACTIVE.value,
                    SubscriptionModel.end_date < now,
                )
                .order_by(SubscriptionModel.end_date, SubscriptionModel.id)
            )
            return [UUID(str(subscription_id)) for subscription_id in result.scalars()]

    @Logger.io
    async def list_active_ids(self, *, subscription_ids: List[UUID]) -> set[UUID]:
        if not subscription_ids:
            return set()
        async with self._get_session() as session:
            result = await session.execute(
                select(SubscriptionModel.id).where(
                    SubscriptionModel.id.in_([_pg_uuid(sid) for sid in subscription_ids]),
                    SubscriptionModel.status == SubscriptionStatus.ACTIVE.value,
                )
            )
            return {UUID(str(subscription_id)) for subscription_id in result.scalars()}

    @Logger.io
    async def list_with_details(self, *, member_id: int | None = None) -> List[Dict[str, Any]]:
        async with self._get_session() as session:
            stmt = (
                select(SubscriptionModel)
                .options(
                    selectinload(SubscriptionModel.member),
                    selectinload(SubscriptionModel.seat),
                    selectinload(SubscriptionModel.payments),
                )
                .order_by(SubscriptionModel.created_at.desc(), SubscriptionModel.id.desc())
            )
            if member_id is not None:
                stmt = stmt.where(SubscriptionModel.member_id == member_id)

            result = await session.execute(stmt)
            return [self._to_subscription_dict(model) for model in result.scalars()]

    @staticmethod
    def _to_subscription_dict(model: SubscriptionModel) -> Dict[str, Any]:
        return {
            'id': str(model.id),  # Convert uuid.UUID (stdlib) to string for Pydantic validation
            'member_id': model.member_id,
            'member_name': model.member.name if model.member else None,
            'member_email': model.member.email if model.member else None,
            'seat_id': model.seat_id,
            'seat_number': model.seat.seat_number if model.seat else None,
            'location_id': model.location_id,
            'start_date': model.start_date,
            'end_date': model.end_date,
            'duration': model.duration,
            'total_amount': model.total_amount,
            'status': model.status,
            'created_at': model.created_at,
            'payments': [
                {
                    'id': str(payment.id),
                    'amount': payment.amount,
                    'method': payment.method,
                    'upi_code': payment.upi_code,
                    'paid_at': payment.paid_at,
                }
                for payment in model.payments
            ],
        }
