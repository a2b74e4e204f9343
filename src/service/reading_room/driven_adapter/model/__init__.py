"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.reading_room.driven_adapter.model.action_log_model import ActionLogModel
from src.service.reading_room.driven_adapter.model.expense_model import ExpenseModel
from src.service.reading_room.driven_adapter.model.fee_type_model import FeeTypeModel
from src.service.reading_room.driven_adapter.model.grievance_model import GrievanceModel
from src.service.reading_room.driven_adapter.model.inventory_model import InventoryModel
from src.service.reading_room.driven_adapter.model.location_model import LocationModel
from src.service.reading_room.driven_adapter.model.member_model import MemberModel
from src.service.reading_room.driven_adapter.model.payment_model import PaymentModel
from src.service.reading_room.driven_adapter.model.seat_model import SeatModel
from src.service.reading_room.driven_adapter.model.subscription_model import SubscriptionModel
from src.service.reading_room.driven_adapter.model.user_model import UserModel
from src.service.reading_room.driven_adapter.model.waiting_list_model import WaitingListModel

__all__ = [
    'ActionLogModel',
    'ExpenseModel',
    'FeeTypeModel',
    'GrievanceModel',
    'InventoryModel',
    'LocationModel',
    'MemberModel',
    'PaymentModel',
    'SeatModel',
    'SubscriptionModel',
    'UserModel',
    'WaitingListModel',
]
