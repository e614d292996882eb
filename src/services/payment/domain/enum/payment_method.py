from enum import Enum


class PaymentMethod(str, Enum):
    """支払い方法"""

    TELEBIRR = "telebirr"
    CBE_BIRR = "cbe_birr"
    AMOLE = "amole"
    BANK_TRANSFER = "bank_transfer"
    PAY_AT_HOTEL = "pay_at_hotel"
