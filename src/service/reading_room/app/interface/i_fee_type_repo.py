from abc import ABC, abstractmethod
from typing import List

from src.service.reading_room.domain.entity.fee_type_entity import FeeType


class IFeeTypeRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, fee_type_id: int) -> FeeType | None:
        pass

    @abstractmethod
    async def get_by_name(self, *, name: str) -> FeeType | None:
        """Case-insensitive"""
        pass

    @abstractmethod
    async def list_all(self) -> List[FeeType]:
        pass

    @abstractmethod
    async def create(self, *, fee_type: FeeType) -> FeeType:
        pass

    @abstractmethod
    async def update(self, *, fee_type: FeeType) -> FeeType:
        pass

    @abstractmethod
    async def delete(self, *, fee_type_id: int) -> None:
        pass
