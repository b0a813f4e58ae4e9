from enum import StrEnum


class BookingStatus(StrEnum):
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    CHECKED_IN = 'checked_in'
    NO_SHOW = 'no_show'


class PaymentMethod(StrEnum):
    CASH = 'cash'
    CARD = 'card'
    UPI = 'upi'
    NETBANKING = 'netbanking'
    WALLET = 'wallet'
    FREE = 'free'


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    PROCESSING = 'processing'
    COMPLETED = 'completed'
    FAILED = 'failed'
    REFUNDED = 'refunded'
