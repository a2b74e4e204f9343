from abc import ABC, abstractmethod
from typing import Any, Dict, List

from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry


class IWaitingListRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, entry_id: int) -> WaitingListEntry | None:
        pass

    @abstractmethod
    async def exists(self, *, member_id: int, location_id: int | None) -> bool:
        """Whether the member already waits for this location (None matches None)"""
        pass

    @abstractmethod
    async def create(self, *, entry: WaitingListEntry) -> WaitingListEntry:
        """Raises ConflictError when the member already waits for this location"""
        pass

    @abstractmethod
    async def delete(self, *, entry_id: int) -> None:
        pass

    @abstractmethod
    async def delete_by_member(self, *, member_id: int) -> int:
        pass

    @abstractmethod
    async def claim_next(self, *, location_id: int | None) -> WaitingListEntry | None:
        """
        Lock and return the queue head ordered by (requested_at, id).

        Args:
            location_id: Only consider entries for this location or with no location.
                None scans the whole queue.

        Returns:
            The head entry, skipping rows another transaction already holds
        """
        pass

    @abstractmethod
    async def get_with_details(self, *, entry_id: int) -> Dict[str, Any] | None:
        """One entry shaped like a list_with_details row"""
        pass

    @abstractmethod
    async def list_with_details(self, *, location_id: int | None = None) -> List[Dict[str, Any]]:
        """Newest first, with member name, email and member code"""
        pass
