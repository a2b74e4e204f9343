from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FeeTypeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    amount: int = Field(..., ge=0)
    duration: str = Field(..., description='"<n> days" or "<n> months"')

    class Config:
        json_schema_extra = {'example': {'name': 'Monthly', 'amount': 1200, 'duration': '1 month'}}


class FeeTypeUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[int] = Field(None, ge=0)
    duration: Optional[str] = None


class FeeTypeResponse(BaseModel):
    id: int
    name: str
    amount: int
    duration: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
