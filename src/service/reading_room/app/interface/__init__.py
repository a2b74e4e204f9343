"""Application layer interfaces (Ports)"""

from src.service.reading_room.app.interface.i_action_log_repo import IActionLogRepo
from src.service.reading_room.app.interface.i_expense_repo import IExpenseRepo
from src.service.reading_room.app.interface.i_fee_type_repo import IFeeTypeRepo
from src.service.reading_room.app.interface.i_grievance_repo import IGrievanceRepo
from src.service.reading_room.app.interface.i_inventory_repo import IInventoryRepo
from src.service.reading_room.app.interface.i_location_repo import ILocationRepo
from src.service.reading_room.app.interface.i_member_repo import IMemberRepo
from src.service.reading_room.app.interface.i_password_hasher import IPasswordHasher
from src.service.reading_room.app.interface.i_payment_repo import IPaymentRepo
from src.service.reading_room.app.interface.i_seat_repo import ISeatRepo
from src.service.reading_room.app.interface.i_subscription_repo import ISubscriptionRepo
from src.service.reading_room.app.interface.i_user_repo import IUserRepo
from src.service.reading_room.app.interface.i_waiting_list_repo import IWaitingListRepo

__all__ = [
    'IActionLogRepo',
    'IExpenseRepo',
    'IFeeTypeRepo',
    'IGrievanceRepo',
    'IInventoryRepo',
    'ILocationRepo',
    'IMemberRepo',
    'IPasswordHasher',
    'IPaymentRepo',
    'ISeatRepo',
    'ISubscriptionRepo',
    'IUserRepo',
    'IWaitingListRepo',
]
