"""Reading Room Domain Entities"""

from src.service.reading_room.domain.entity.action_log_entity import ActionLog
from src.service.reading_room.domain.entity.expense_entity import Expense
from src.service.reading_room.domain.entity.fee_type_entity import FeeType
from src.service.reading_room.domain.entity.grievance_entity import Grievance
from src.service.reading_room.domain.entity.inventory_entity import InventoryItem
from src.service.reading_room.domain.entity.location_entity import Location
from src.service.reading_room.domain.entity.member_entity import Member, build_member_code
from src.service.reading_room.domain.entity.payment_entity import Payment
from src.service.reading_room.domain.entity.seat_entity import Seat
from src.service.reading_room.domain.entity.subscription_entity import Subscription
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.entity.waiting_list_entity import WaitingListEntry

__all__ = [
    'ActionLog',
    'Expense',
    'FeeType',
    'Grievance',
    'InventoryItem',
    'Location',
    'Member',
    'Payment',
    'Seat',
    'Subscription',
    'UserEntity',
    'WaitingListEntry',
    'build_member_code',
]
