from abc import ABC, abstractmethod
from typing import List

from src.service.reading_room.domain.entity.member_entity import Member


class IMemberRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, member_id: int) -> Member | None:
        pass

    @abstractmethod
    async def get_by_code(self, *, member_code: str) -> Member | None:
        pass

    @abstractmethod
    async def get_by_email(self, *, email: str) -> Member | None:
        pass

    @abstractmethod
    async def list_all(self) -> List[Member]:
        pass

    @abstractmethod
    async def create(self, *, member: Member) -> Member:
        """Persist a new member and assign its member code from the generated id"""
        pass

    @abstractmethod
    async def update(self, *, member: Member) -> Member:
        pass

    @abstractmethod
    async def delete(self, *, member_id: int) -> None:
        """Soft delete, the member drops out of every lookup above"""
        pass
