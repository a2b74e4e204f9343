from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.reading_room.domain.enum.log_action import LogAction


class ActionLogResponse(BaseModel):
    id: int
    action: LogAction
    entity: str
    entity_id: str
    details: str
    performed_by: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
