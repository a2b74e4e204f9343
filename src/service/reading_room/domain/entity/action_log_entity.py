from datetime import datetime
from typing import Optional

import attrs

from src.service.reading_room.domain.enum.log_action import LogAction


SYSTEM_ACTOR = 'system'


@attrs.frozen
class ActionLog:
    """Who changed what. Append only."""

    action: LogAction
    entity: str
    entity_id: str
    details: str
    performed_by: str = SYSTEM_ACTOR
    id: Optional[int] = None
    created_at: Optional[datetime] = None
