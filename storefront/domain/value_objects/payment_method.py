"""Payment method value object"""

from enum import Enum
from typing import Optional


class PaymentMethod(Enum):
    """Closed set of payment choices passed through to the backend"""

    UPI = "UPI"
    WALLET = "WALLET"
    CASH_ON_HAND = "CASH_ON_HAND"

    @classmethod
    def parse(cls, value) -> Optional["PaymentMethod"]:
        """Return the matching member, or None for anything outside the set"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return None
        return None
