from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.reading_room.driven_adapter.model.member_model import MemberModel


class WaitingListModel(Base):
    __tablename__ = 'waiting_list'
    __table_args__ = (
        # Queue order used by dispatch
        Index('ix_waiting_list_queue', 'location_id', 'requested_at', 'id'),
        # One entry per member and location, a missing location counts as one value
        Index(
            'uq_waiting_list_member_location',
            'member_id',
            'location_id',
            unique=True,
            postgresql_nulls_not_distinct=True,
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('member.id', ondelete='CASCADE'), nullable=False, index=True
    )
    location_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('location.id'), nullable=True
    )
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    upi_code: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    member: Mapped['MemberModel'] = relationship('MemberModel', viewonly=True, lazy='noload')
