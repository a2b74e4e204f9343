from enum import StrEnum


class GrievanceCategory(StrEnum):
    AC = 'AC'
    FAN = 'Fan'
    LIGHTS = 'Lights'
    FURNITURE = 'Furniture'
    WASHROOM = 'Washroom'
    INTERNET = 'Internet'
    NOISE = 'Noise'
    CLEANLINESS = 'Cleanliness'
    SAFETY = 'Safety'
    OTHER = 'Other'


class GrievanceStatus(StrEnum):
    PENDING = 'Pending'
    IN_PROGRESS = 'In Progress'
    RESOLVED = 'Resolved'
    REJECTED = 'Rejected'

    @property
    def is_closed(self) -> bool:
        return self in (GrievanceStatus.RESOLVED, GrievanceStatus.REJECTED)


class GrievancePriority(StrEnum):
    LOW = 'Low'
    MEDIUM = 'Medium'
    HIGH = 'High'
    CRITICAL = 'Critical'
