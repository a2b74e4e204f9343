from enum import StrEnum


class SubscriptionStatus(StrEnum):
    ACTIVE = 'active'
    EXPIRED = 'expired'
