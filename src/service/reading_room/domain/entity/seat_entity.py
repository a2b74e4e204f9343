from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.reading_room.domain.enum.seat_status import SeatStatus
from src.service.reading_room.domain.value_object.seat_occupancy import SeatOccupancy


@attrs.define
class Seat:
    seat_number: int
    location_id: int
    id: Optional[int] = None
    occupancy: Optional[SeatOccupancy] = None

    @property
    def status(self) -> SeatStatus:
        return SeatStatus.OCCUPIED if self.occupancy else SeatStatus.VACANT

    @property
    def assigned_member_id(self) -> Optional[int]:
        return self.occupancy.member_id if self.occupancy else None

    @property
    def subscription_id(self) -> Optional[UUID]:
        return self.occupancy.subscription_id if self.occupancy else None

    @property
    def is_vacant(self) -> bool:
        return self.occupancy is None

    def is_held_by(self, subscription_id: UUID) -> bool:
        return self.occupancy is not None and self.occupancy.subscription_id == subscription_id

    def free(self) -> 'Seat':
        if self.occupancy is None:
            return self
        return attrs.evolve(self, occupancy=None)

    def occupy(self, *, member_id: int, subscription_id: Optional[UUID] = None) -> 'Seat':
        return attrs.evolve(
            self, occupancy=SeatOccupancy(member_id=member_id, subscription_id=subscription_id)
        )
