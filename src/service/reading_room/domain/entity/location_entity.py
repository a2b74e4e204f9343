from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define
class Location:
    name: str
    address: str
    total_seats: int
    id: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @staticmethod
    def validate_total_seats(total_seats: int) -> None:
        if total_seats <= 0:
            raise DomainError('total_seats must be positive')

    @classmethod
    def create(cls, *, name: str, address: str, total_seats: int) -> 'Location':
        if not name or not name.strip():
            raise DomainError('name is required')
        cls.validate_total_seats(total_seats)
        return cls(name=name.strip(), address=address, total_seats=total_seats)

    def update(
        self,
        *,
        name: Optional[str] = None,
        address: Optional[str] = None,
        total_seats: Optional[int] = None,
    ) -> 'Location':
        if total_seats is not None:
            self.validate_total_seats(total_seats)
        return attrs.evolve(
            self,
            name=name if name else self.name,
            address=address if address is not None else self.address,
            total_seats=total_seats if total_seats is not None else self.total_seats,
        )

    def deactivate(self) -> 'Location':
        return attrs.evolve(self, is_active=False)

    def activate(self) -> 'Location':
        return attrs.evolve(self, is_active=True)

    def missing_seat_numbers(self, existing: set[int]) -> list[int]:
        """Seat numbers in 1..total_seats that have no row yet"""
        return [n for n in range(1, self.total_seats + 1) if n not in existing]
