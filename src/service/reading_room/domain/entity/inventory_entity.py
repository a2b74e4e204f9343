from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.enum.enum_parsing import parse_enum
from src.service.reading_room.domain.enum.inventory_enums import InventoryCategory, InventoryStatus


@attrs.define
class InventoryItem:
    """Equipment kept at a location: ACs, fans, furniture and the like."""

    name: str
    category: InventoryCategory
    location_id: int
    quantity: int = 1
    amount: int = 0
    status: InventoryStatus = InventoryStatus.WORKING
    purchase_date: Optional[datetime] = None
    last_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    serial_number: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @staticmethod
    def validate_fields(*, name: str, quantity: int, amount: int) -> None:
        if not name or not name.strip():
            raise DomainError('name is required')
        if quantity < 1:
            raise DomainError('quantity must be at least 1')
        if amount < 0:
            raise DomainError('amount must not be negative')

    @classmethod
    def create(
        cls,
        *,
        name: str,
        category: str,
        location_id: Optional[int],
        quantity: int = 1,
        amount: int = 0,
        status: str = InventoryStatus.WORKING,
        **details,
    ) -> 'InventoryItem':
        if location_id is None:
            raise DomainError('location_id is required')
        cls.validate_fields(name=name, quantity=quantity, amount=amount)
        return cls(
            name=name.strip(),
            category=parse_enum(InventoryCategory, category, field='category'),
            location_id=location_id,
            quantity=quantity,
            amount=amount,
            status=parse_enum(InventoryStatus, status, field='status'),
            **details,
        )

    def update(self, **changes) -> 'InventoryItem':
        changes = {k: v for k, v in changes.items() if v is not None}
        if 'category' in changes:
            changes['category'] = parse_enum(
                InventoryCategory, changes['category'], field='category'
            )
        if 'status' in changes:
            changes['status'] = parse_enum(InventoryStatus, changes['status'], field='status')
        updated = attrs.evolve(self, **changes)
        self.validate_fields(name=updated.name, quantity=updated.quantity, amount=updated.amount)
        return updated

    def describe(self) -> str:
        return f'{self.name} ({self.category.value})'
