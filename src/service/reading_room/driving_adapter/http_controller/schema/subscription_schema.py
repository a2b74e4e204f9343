from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.reading_room.domain.enum.payment_method import PaymentMethod


class EnrollRequest(BaseModel):
    member_id: int
    location_id: int
    seat_number: int = Field(..., gt=0)
    start_date: datetime
    duration: str = Field(..., description='"<n> days" or "<n> months"')
    amount: int = Field(..., ge=0)
    payment_method: PaymentMethod
    upi_code: Optional[str] = Field(None, max_length=100)
    paid_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            'example': {
                'member_id': 1,
                'location_id': 1,
                'seat_number': 12,
                'start_date': '2025-01-01T00:00:00Z',
                'duration': '1 month',
                'amount': 1500,
                'payment_method': 'UPI',
                'upi_code': 'UPI-REF-001',
            }
        }


class AddPaymentRequest(BaseModel):
    amount: int = Field(..., gt=0)
    method: PaymentMethod
    upi_code: Optional[str] = Field(None, max_length=100)
    paid_at: Optional[datetime] = None


class PaymentResponse(BaseModel):
    id: UtilsUUID7
    subscription_id: UtilsUUID7
    amount: int
    method: PaymentMethod
    upi_code: Optional[str] = None
    paid_at: datetime

    class Config:
        from_attributes = True


class SubscriptionResponse(BaseModel):
    id: UtilsUUID7
    member_id: int
    seat_id: int
    location_id: int
    start_date: datetime
    end_date: datetime
    duration: str
    total_amount: int
    payment_ids: List[UtilsUUID7] = []
    status: str

    class Config:
        from_attributes = True


class EnrollResponse(BaseModel):
    message: str
    subscription: Optional[SubscriptionResponse] = None
    payment: Optional[PaymentResponse] = None
    waiting_entry_id: Optional[int] = None


class SubscriptionPaymentItem(BaseModel):
    id: str
    amount: int
    method: str
    upi_code: Optional[str] = None
    paid_at: datetime


class SubscriptionDetailResponse(BaseModel):
    id: str
    member_id: int
    member_name: Optional[str] = None
    member_email: Optional[str] = None
    seat_id: int
    seat_number: Optional[int] = None
    location_id: int
    start_date: datetime
    end_date: datetime
    duration: str
    total_amount: int
    status: str
    created_at: Optional[datetime] = None
    payments: List[SubscriptionPaymentItem] = []


class MessageResponse(BaseModel):
    message: str


class ExpireLapsedResponse(BaseModel):
    message: str
    subscription_ids: List[str]
