from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.enum.enum_parsing import parse_enum
from src.service.reading_room.domain.enum.expense_enums import ExpenseCategory, ExpenseMethod
from src.service.reading_room.domain.value_object.enrollment_terms import as_utc


@attrs.define
class Expense:
    description: str
    amount: int
    category: ExpenseCategory
    method: ExpenseMethod
    location_id: int
    spent_on: datetime
    paid_to: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @staticmethod
    def validate_fields(*, description: str, amount: int) -> None:
        if not description or not description.strip():
            raise DomainError('description is required')
        if amount <= 0:
            raise DomainError('amount must be positive')

    @classmethod
    def create(
        cls,
        *,
        description: str,
        amount: int,
        category: str,
        method: str,
        location_id: Optional[int],
        spent_on: Optional[datetime] = None,
        paid_to: Optional[str] = None,
    ) -> 'Expense':
        if location_id is None:
            raise DomainError('location_id is required')
        cls.validate_fields(description=description, amount=amount)
        return cls(
            description=description.strip(),
            amount=amount,
            category=parse_enum(ExpenseCategory, category, field='category'),
            method=parse_enum(ExpenseMethod, method, field='method'),
            location_id=location_id,
            spent_on=as_utc(spent_on) if spent_on else datetime.now(timezone.utc),
            paid_to=paid_to,
        )

    def update(self, **changes) -> 'Expense':
        changes = {k: v for k, v in changes.items() if v is not None}
        if 'category' in changes:
            changes['category'] = parse_enum(ExpenseCategory, changes['category'], field='category')
        if 'method' in changes:
            changes['method'] = parse_enum(ExpenseMethod, changes['method'], field='method')
        if 'spent_on' in changes:
            changes['spent_on'] = as_utc(changes['spent_on'])
        updated = attrs.evolve(self, **changes)
        self.validate_fields(description=updated.description, amount=updated.amount)
        return updated
