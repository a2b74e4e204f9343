from enum import StrEnum


class SeatStatus(StrEnum):
    VACANT = 'vacant'
    OCCUPIED = 'occupied'
