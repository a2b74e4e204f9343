from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.enum.enum_parsing import parse_enum
from src.service.reading_room.domain.enum.grievance_enums import (
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
)


@attrs.define
class Grievance:
    """
    A complaint raised by any logged in user about a location.

    Staff move it through Pending -> In Progress -> Resolved or Rejected. Closing it
    stamps who closed it and when, reopening clears both.
    """

    title: str
    description: str
    category: GrievanceCategory
    location_id: int
    reported_by: int
    status: GrievanceStatus = GrievanceStatus.PENDING
    priority: GrievancePriority = GrievancePriority.MEDIUM
    resolution: Optional[str] = None
    resolved_by: Optional[int] = None
    resolved_at: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        title: str,
        description: str,
        category: str,
        location_id: Optional[int],
        reported_by: int,
        priority: Optional[str] = None,
    ) -> 'Grievance':
        if not title or not title.strip() or not description or not description.strip():
            raise DomainError('Title, description, category, and location are required')
        if not category or location_id is None:
            raise DomainError('Title, description, category, and location are required')
        return cls(
            title=title.strip(),
            description=description.strip(),
            category=parse_enum(GrievanceCategory, category, field='category'),
            location_id=location_id,
            reported_by=reported_by,
            priority=parse_enum(
                GrievancePriority, priority or GrievancePriority.MEDIUM, field='priority'
            ),
        )

    def review(
        self,
        *,
        reviewer_id: int,
        now: datetime,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        resolution: Optional[str] = None,
    ) -> 'Grievance':
        new_status = parse_enum(GrievanceStatus, status, field='status') if status else self.status
        updated = attrs.evolve(
            self,
            status=new_status,
            priority=parse_enum(GrievancePriority, priority, field='priority')
            if priority
            else self.priority,
            resolution=resolution if resolution is not None else self.resolution,
        )
        if new_status.is_closed and not self.status.is_closed:
            return attrs.evolve(updated, resolved_by=reviewer_id, resolved_at=now)
        if not new_status.is_closed:
            return attrs.evolve(updated, resolved_by=None, resolved_at=None)
        return updated

    def is_reported_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.reported_by == user_id
