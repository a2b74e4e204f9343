from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LocationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    total_seats: int = Field(..., gt=0, le=1000)

    class Config:
        json_schema_extra = {
            'example': {'name': 'Main Branch', 'address': '12 MG Road', 'total_seats': 46}
        }


class LocationUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    total_seats: Optional[int] = Field(None, gt=0, le=1000)
    is_active: Optional[bool] = None


class LocationResponse(BaseModel):
    id: int
    name: str
    address: str
    total_seats: int
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
