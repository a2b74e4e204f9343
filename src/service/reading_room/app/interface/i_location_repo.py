from abc import ABC, abstractmethod
from typing import List

from src.service.reading_room.domain.entity.location_entity import Location


class ILocationRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, location_id: int) -> Location | None:
        pass

    @abstractmethod
    async def list_active(self) -> List[Location]:
        pass

    @abstractmethod
    async def create(self, *, location: Location) -> Location:
        pass

    @abstractmethod
    async def update(self, *, location: Location) -> Location:
        pass
