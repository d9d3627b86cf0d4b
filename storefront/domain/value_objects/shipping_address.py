"""
Shipping Address value object
"""

from dataclasses import dataclass
from typing import Optional

from storefront.domain.value_objects.phone_number import PhoneNumber


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


@dataclass(frozen=True)
class ShippingAddress:
    """Shipping address with contact numbers"""

    line1: str
    district: str
    state: str
    country: str
    phone: PhoneNumber
    line2: Optional[str] = None
    alternate_phone: Optional[PhoneNumber] = None

    def __post_init__(self):
        """Validate shipping address"""
        for name in ("line1", "district", "state", "country"):
            value = _clean(getattr(self, name))
            if not value:
                raise ValueError(f"Shipping address {name} cannot be empty")
            object.__setattr__(self, name, value)

        if len(self.line1) > 500:
            raise ValueError("Address line 1 cannot exceed 500 characters")

        object.__setattr__(self, "line2", _clean(self.line2))

    @classmethod
    def create(
        cls,
        line1: str,
        district: str,
        state: str,
        country: str,
        phone: str,
        line2: Optional[str] = None,
        alternate_phone: Optional[str] = None,
    ) -> "ShippingAddress":
        """Build an address from raw form strings"""
        alternate = _clean(alternate_phone)
        return cls(
            line1=line1,
            district=district,
            state=state,
            country=country,
            phone=PhoneNumber(phone),
            line2=line2,
            alternate_phone=PhoneNumber(alternate) if alternate else None,
        )
