from abc import ABC, abstractmethod
from typing import Any, Dict, List

from src.service.reading_room.domain.entity.seat_entity import Seat


class ISeatRepo(ABC):
    """
    Seat Repository Interface

    A seat row carries its occupancy (member and optional subscription) or nothing.
    """

    @abstractmethod
    async def get_by_id(self, *, seat_id: int, for_update: bool = False) -> Seat | None:
        """for_update locks the row until the unit of work ends"""
        pass

    @abstractmethod
    async def get_by_number(
        self, *, location_id: int, seat_number: int, for_update: bool = False
    ) -> Seat | None:
        pass

    @abstractmethod
    async def list_occupied(self) -> List[Seat]:
        pass

    @abstractmethod
    async def list_seat_numbers(self, *, location_id: int) -> set[int]:
        pass

    @abstractmethod
    async def create_many(self, *, location_id: int, seat_numbers: List[int]) -> int:
        """Insert vacant seats, returns how many rows were created"""
        pass

    @abstractmethod
    async def update(self, *, seat: Seat) -> Seat:
        pass

    @abstractmethod
    async def list_with_details(self, *, location_id: int | None = None) -> List[Dict[str, Any]]:
        """
        Seats ordered by (location, seat_number), each with the assigned member's name
        and the referenced subscription's end date and status
        """
        pass
