from enum import StrEnum


class ExpenseCategory(StrEnum):
    EQUIPMENT = 'Equipment'
    MAINTENANCE = 'Maintenance'
    UTILITIES = 'Utilities'
    SALARIES = 'Salaries'
    MARKETING = 'Marketing'
    SUPPLIES = 'Supplies'
    RENT = 'Rent'
    OTHER = 'Other'


class ExpenseMethod(StrEnum):
    CASH = 'Cash'
    UPI = 'UPI'
    BANK_TRANSFER = 'Bank Transfer'
    CHEQUE = 'Cheque'
