from enum import StrEnum


class PromoCodeState(StrEnum):
    UNUSED = 'unused'
    BOUND = 'bound'  # held by an active reservation
    REDEEMED = 'redeemed'  # consumed by a confirmed booking
