from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.service.reading_room.domain.enum.payment_method import PaymentMethod


class WaitingListCreateRequest(BaseModel):
    # Optional here so a missing member_id is reported by the use case as a 400
    member_id: Optional[int] = None
    location_id: Optional[int] = None
    start_date: Optional[datetime] = None
    duration: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)
    payment_method: Optional[PaymentMethod] = None
    upi_code: Optional[str] = Field(None, max_length=100)
    paid_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            'example': {
                'member_id': 3,
                'location_id': 1,
                'duration': '30 days',
                'amount': 1200,
                'payment_method': 'cash',
            }
        }


class WaitingMemberItem(BaseModel):
    id: int
    name: str
    email: str
    member_code: Optional[str] = None


class WaitingListEntryResponse(BaseModel):
    id: int
    member: WaitingMemberItem
    location_id: Optional[int] = None
    requested_at: datetime
    start_date: Optional[datetime] = None
    duration: Optional[str] = None
    amount: Optional[int] = None
    payment_method: Optional[str] = None
