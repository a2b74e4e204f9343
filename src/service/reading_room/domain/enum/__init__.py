"""Reading Room Domain Enums"""

from src.service.reading_room.domain.enum.expense_enums import ExpenseCategory, ExpenseMethod
from src.service.reading_room.domain.enum.grievance_enums import (
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
)
from src.service.reading_room.domain.enum.inventory_enums import InventoryCategory, InventoryStatus
from src.service.reading_room.domain.enum.log_action import LogAction
from src.service.reading_room.domain.enum.payment_method import PaymentMethod
from src.service.reading_room.domain.enum.seat_status import SeatStatus
from src.service.reading_room.domain.enum.subscription_status import SubscriptionStatus
from src.service.reading_room.domain.enum.user_role import UserRole

__all__ = [
    'ExpenseCategory',
    'ExpenseMethod',
    'GrievanceCategory',
    'GrievancePriority',
    'GrievanceStatus',
    'InventoryCategory',
    'InventoryStatus',
    'LogAction',
    'PaymentMethod',
    'SeatStatus',
    'SubscriptionStatus',
    'UserRole',
]
