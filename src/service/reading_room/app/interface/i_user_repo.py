from abc import ABC, abstractmethod

from src.service.reading_room.domain.entity.user_entity import UserEntity


class IUserRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        pass

    @abstractmethod
    async def get_by_email(self, *, email: str) -> UserEntity | None:
        pass

    @abstractmethod
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def delete(self, *, user_id: int) -> None:
        pass
