from enum import StrEnum


class DiscountType(StrEnum):
    PERCENTAGE = 'percentage'
    FIXED = 'fixed'
    FREE = 'free'
