from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.reading_room.domain.entity.action_log_entity import ActionLog


class IActionLogRepo(ABC):
    @abstractmethod
    async def create(self, *, log: ActionLog) -> ActionLog:
        pass

    @abstractmethod
    async def list_recent(
        self, *, entity: Optional[str] = None, limit: int = 100
    ) -> List[ActionLog]:
        pass
