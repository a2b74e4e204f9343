from enum import StrEnum


class PaymentMethod(StrEnum):
    UPI = 'UPI'
    CASH = 'cash'
