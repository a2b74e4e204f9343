from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.reading_room.driving_adapter.http_controller.schema.member_schema import (
    MemberResponse,
)


class PaymentHistoryItem(BaseModel):
    id: UtilsUUID7
    subscription_id: UtilsUUID7
    amount: int
    method: str
    upi_code: Optional[str] = None
    paid_at: datetime

    class Config:
        from_attributes = True


class PaymentSummary(BaseModel):
    total_payments: int
    total_paid: int


class PaymentHistoryResponse(BaseModel):
    member: MemberResponse
    payments: List[PaymentHistoryItem]
    summary: PaymentSummary
