import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.reading_room.driven_adapter.model.member_model import MemberModel
    from src.service.reading_room.driven_adapter.model.subscription_model import (
        SubscriptionModel,
    )


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (
        UniqueConstraint('location_id', 'seat_number', name='uq_seat_location_number'),
        # occupied <=> a member is assigned; a subscription never hangs off a vacant seat
        CheckConstraint(
            "(status = 'occupied' AND assigned_member_id IS NOT NULL) OR "
            "(status = 'vacant' AND assigned_member_id IS NULL AND subscription_id IS NULL)",
            name='occupancy',
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('location.id'), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), default='vacant', nullable=False)
    assigned_member_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('member.id'), nullable=True, index=True
    )
    # No FK: a seat may outlive the subscription it points at until reconciliation
    subscription_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        PG_UUID(as_uuid=True), nullable=True
    )

    assigned_member: Mapped[Optional['MemberModel']] = relationship(
        'MemberModel', viewonly=True, lazy='noload'
    )
    subscription: Mapped[Optional['SubscriptionModel']] = relationship(
        'SubscriptionModel',
        primaryjoin='foreign(SeatModel.subscription_id) == SubscriptionModel.id',
        viewonly=True,
        lazy='noload',
    )
