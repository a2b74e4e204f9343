import uuid
from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.reading_room.driven_adapter.model.member_model import MemberModel
    from src.service.reading_room.driven_adapter.model.payment_model import PaymentModel
    from src.service.reading_room.driven_adapter.model.seat_model import SeatModel


class SubscriptionModel(Base):
    __tablename__ = 'subscription'

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('member.id'), nullable=False, index=True
    )
    seat_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    location_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    duration: Mapped[str] = mapped_column(String(50), nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='active', nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    member: Mapped['MemberModel'] = relationship('MemberModel', viewonly=True, lazy='noload')
    seat: Mapped['SeatModel'] = relationship(
        'SeatModel',
        primaryjoin='foreign(SubscriptionModel.seat_id) == SeatModel.id',
        viewonly=True,
        lazy='noload',
    )
    payments: Mapped[List['PaymentModel']] = relationship(
        'PaymentModel',
        viewonly=True,
        lazy='noload',
        order_by='PaymentModel.paid_at',
    )
