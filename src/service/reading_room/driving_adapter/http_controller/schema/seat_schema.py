from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.reading_room.domain.enum.seat_status import SeatStatus


class SeatResponse(BaseModel):
    id: int
    seat_number: int
    location_id: int
    status: SeatStatus
    assigned_member_id: Optional[int] = None
    assigned_member_name: Optional[str] = None
    subscription_id: Optional[str] = None
    subscription_end_date: Optional[datetime] = None
    subscription_status: Optional[str] = None


class ReconcileSeatsResponse(BaseModel):
    message: str
    freed_seats: int
