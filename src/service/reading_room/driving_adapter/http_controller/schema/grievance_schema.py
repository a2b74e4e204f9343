from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.service.reading_room.domain.enum.grievance_enums import (
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
)


class GrievanceCreateRequest(BaseModel):
    title: str = Field(..., max_length=255)
    description: str
    category: GrievanceCategory
    location_id: Optional[int] = None
    priority: Optional[GrievancePriority] = None

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'AC not cooling',
                'description': 'Second floor AC has been blowing warm air since Monday',
                'category': 'AC',
                'location_id': 1,
                'priority': 'High',
            }
        }


class GrievanceReviewRequest(BaseModel):
    status: Optional[GrievanceStatus] = None
    priority: Optional[GrievancePriority] = None
    resolution: Optional[str] = None


class GrievanceResponse(BaseModel):
    id: int
    title: str
    description: str
    category: GrievanceCategory
    location_id: int
    reported_by: int
    status: GrievanceStatus
    priority: GrievancePriority
    resolution: Optional[str] = None
    resolved_by: Optional[int] = None
    resolved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
