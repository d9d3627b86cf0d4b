"""
Phone Number value object

Represents a contact phone number on a shipping address.
"""

import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class PhoneNumber:
    """
    Phone number value object

    Separators are stripped; a leading + is kept.
    """

    value: str

    MIN_DIGITS: ClassVar[int] = 7
    MAX_DIGITS: ClassVar[int] = 15

    def __post_init__(self):
        """Validate phone number on creation"""
        if not self.value or not self.value.strip():
            raise ValueError("Phone number cannot be empty")

        normalized = self._normalize_phone_number(self.value)
        digits = normalized.lstrip("+")
        if not digits.isdigit() or not self.MIN_DIGITS <= len(digits) <= self.MAX_DIGITS:
            raise ValueError(f"Invalid phone number: {self.value}")

        # Use object.__setattr__ because the class is frozen
        object.__setattr__(self, "value", normalized)

    @staticmethod
    def _normalize_phone_number(phone: str) -> str:
        """Remove spaces, dashes, dots and brackets"""
        return re.sub(r"[\s\-().]", "", phone.strip())

    def __str__(self) -> str:
        return self.value
