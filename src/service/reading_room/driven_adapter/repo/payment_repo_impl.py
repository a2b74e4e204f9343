import uuid
from typing import List

from sqlalchemy import select
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_payment_repo import IPaymentRepo
from src.service.reading_room.domain.entity.payment_entity import Payment
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.driven_adapter.model.payment_model import PaymentModel
from src.service.reading_room.driven_adapter.model.subscription_model import SubscriptionModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo


class PaymentRepoImpl(SessionRepo, IPaymentRepo):
    @staticmethod
    def _to_entity(model: PaymentModel) -> Payment:
        return Payment(
            id=UUID(str(model.id)),
            subscription_id=UUID(str(model.subscription_id)),
            amount=model.amount,
            method=PaymentMethod(model.method),
            paid_at=model.paid_at,
            upi_code=model.upi_code,
        )

    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        async with self._get_session() as session:
            model = PaymentModel(
                id=uuid.UUID(str(payment.id)),
                subscription_id=uuid.UUID(str(payment.subscription_id)),
                amount=payment.amount,
                method=payment.method.value,
                upi_code=payment.upi_code,
                paid_at=payment.paid_at,
            )
            session.add(model)
            await session.flush()
            return self._to_entity(model)

    @Logger.io
    async def list_by_member(self, *, member_id: int) -> List[Payment]:
        async with self._get_session() as session:
            result = await session.execute(
                select(PaymentModel)
                .join(SubscriptionModel, PaymentModel.subscription_id == SubscriptionModel.id)
                .where(SubscriptionModel.member_id == member_id)
                .order_by(PaymentModel.paid_at.desc(), PaymentModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars()]
