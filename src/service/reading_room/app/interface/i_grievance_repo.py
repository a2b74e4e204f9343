from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.reading_room.domain.entity.grievance_entity import Grievance


class IGrievanceRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, grievance_id: int) -> Grievance | None:
        pass

    @abstractmethod
    async def list_scoped(
        self,
        *,
        location_ids: Optional[List[int]] = None,
        reported_by: Optional[int] = None,
    ) -> List[Grievance]:
        """Newest first, both filters are optional and combine"""
        pass

    @abstractmethod
    async def create(self, *, grievance: Grievance) -> Grievance:
        pass

    @abstractmethod
    async def update(self, *, grievance: Grievance) -> Grievance:
        pass

    @abstractmethod
    async def delete(self, *, grievance_id: int) -> None:
        pass
