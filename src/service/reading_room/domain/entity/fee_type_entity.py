from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.value_object.plan_duration import PlanDuration


DUPLICATE_FEE_NAME = 'A fee type with this name already exists'


@attrs.define
class FeeType:
    """A named price list entry staff pick from when enrolling, "Monthly - 1200 for 30 days"."""

    name: str
    amount: int
    duration: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @staticmethod
    def validate_fields(*, name: str, amount: int, duration: str) -> str:
        if not name or not name.strip():
            raise DomainError('name is required')
        if amount < 0:
            raise DomainError('amount must not be negative')
        # Stored normalised so it can be fed straight into an enrollment
        return str(PlanDuration.parse(duration))

    @classmethod
    def create(cls, *, name: str, amount: int, duration: str) -> 'FeeType':
        normalised = cls.validate_fields(name=name, amount=amount, duration=duration)
        return cls(name=name.strip(), amount=amount, duration=normalised)

    def update(
        self,
        *,
        name: Optional[str] = None,
        amount: Optional[int] = None,
        duration: Optional[str] = None,
    ) -> 'FeeType':
        updated = attrs.evolve(
            self,
            name=name.strip() if name else self.name,
            amount=amount if amount is not None else self.amount,
            duration=duration or self.duration,
        )
        normalised = self.validate_fields(
            name=updated.name, amount=updated.amount, duration=updated.duration
        )
        return attrs.evolve(updated, duration=normalised)
