from datetime import datetime, timezone
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.domain.enum.subscription_status import SubscriptionStatus
from src.service.reading_room.domain.value_object.enrollment_terms import EnrollmentTerms


@attrs.define
class Subscription:
    id: UUID
    member_id: int
    seat_id: int
    location_id: int
    start_date: datetime
    end_date: datetime
    duration: str
    total_amount: int
    payment_ids: List[UUID] = attrs.field(factory=list)
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        member_id: int,
        seat_id: int,
        location_id: int,
        terms: EnrollmentTerms,
    ) -> 'Subscription':
        return cls(
            id=id,
            member_id=member_id,
            seat_id=seat_id,
            location_id=location_id,
            start_date=terms.start_date,
            end_date=terms.end_date,
            duration=str(terms.duration),
            total_amount=terms.amount,
            status=SubscriptionStatus.ACTIVE,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    def has_lapsed(self, now: datetime) -> bool:
        return self.end_date < now

    def expire(self) -> 'Subscription':
        return attrs.evolve(self, status=SubscriptionStatus.EXPIRED)

    def with_payment(self, payment_id: UUID) -> 'Subscription':
        return attrs.evolve(self, payment_ids=[*self.payment_ids, payment_id])
