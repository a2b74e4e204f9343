from enum import StrEnum


class InventoryCategory(StrEnum):
    AC = 'AC'
    CCTV = 'CCTV'
    FAN = 'Fan'
    LIGHT = 'Light'
    FURNITURE = 'Furniture'
    ELECTRONICS = 'Electronics'
    OTHER = 'Other'


class InventoryStatus(StrEnum):
    WORKING = 'Working'
    UNDER_MAINTENANCE = 'Under Maintenance'
    BROKEN = 'Broken'
    RETIRED = 'Retired'
