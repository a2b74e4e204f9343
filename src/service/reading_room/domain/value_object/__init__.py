"""Reading Room Domain Value Objects"""

from src.service.reading_room.domain.value_object.enrollment_terms import EnrollmentTerms, as_utc
from src.service.reading_room.domain.value_object.plan_duration import PlanDuration
from src.service.reading_room.domain.value_object.seat_occupancy import SeatOccupancy

__all__ = ['EnrollmentTerms', 'as_utc', 'PlanDuration', 'SeatOccupancy']
