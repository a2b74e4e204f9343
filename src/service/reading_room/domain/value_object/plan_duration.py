import calendar
from datetime import datetime, timedelta
import re

import attrs

from src.platform.exception.exceptions import DomainError


_DURATION_PATTERN = re.compile(r'^\s*(\d+)\s*(day|days|month|months)\s*$', re.IGNORECASE)


def add_months(start: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length (Jan 31 + 1 -> Feb 28/29)."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


@attrs.frozen
class PlanDuration:
    """A subscription length written the way staff enter it: "30 days", "2 months"."""

    quantity: int
    unit: str  # 'day' or 'month'

    @classmethod
    def parse(cls, text: str) -> 'PlanDuration':
        match = _DURATION_PATTERN.match(text or '')
        if not match:
            raise DomainError(
                f'Invalid duration "{text}". Expected "<n> days" or "<n> months"', 400
            )
        quantity = int(match.group(1))
        if quantity <= 0:
            raise DomainError('Duration must be positive', 400)
        unit = 'month' if match.group(2).lower().startswith('month') else 'day'
        return cls(quantity=quantity, unit=unit)

    def end_date(self, start: datetime) -> datetime:
        if self.unit == 'day':
            return start + timedelta(days=self.quantity)
        return add_months(start, self.quantity)

    def __str__(self) -> str:
        suffix = '' if self.quantity == 1 else 's'
        return f'{self.quantity} {self.unit}{suffix}'
