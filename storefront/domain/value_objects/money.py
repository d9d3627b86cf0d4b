"""
Money value object

Represents monetary amounts with currency handling.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union


@dataclass(frozen=True)
class Money:
    """
    Money value object that handles currency amounts properly

    Amounts are kept exact; rounding happens only when formatting for display.
    """

    amount: Decimal
    currency: str = "INR"

    def __post_init__(self):
        """Validate money object on creation"""
        if not isinstance(self.amount, Decimal):
            # str() first so floats like 0.1 do not leak binary noise
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter code")

        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def from_float(cls, amount: float, currency: str = "INR") -> "Money":
        """Create Money from float amount"""
        return cls(Decimal(str(amount)), currency)

    @classmethod
    def zero(cls, currency: str = "INR") -> "Money":
        """Create zero money amount"""
        return cls(Decimal("0"), currency)

    def add(self, other: "Money") -> "Money":
        """Add two money amounts"""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot add different currencies: {self.currency} and {other.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, factor: Union[int, float, Decimal]) -> "Money":
        """Multiply money by a factor"""
        if not isinstance(factor, Decimal):
            factor = Decimal(str(factor))
        if factor < 0:
            raise ValueError("Cannot multiply money by negative factor")
        return Money(self.amount * factor, self.currency)

    def is_zero(self) -> bool:
        """Check if amount is zero"""
        return self.amount == Decimal("0")

    def format_display(self) -> str:
        """Format for display to users"""
        rounded = self.amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return f"{rounded:,.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format_display()

    def __repr__(self) -> str:
        return f"Money(amount={self.amount}, currency='{self.currency}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return False
        return self.amount == other.amount and self.currency == other.currency

    def __hash__(self) -> int:
        return hash((self.amount, self.currency))

    def __add__(self, other: "Money") -> "Money":
        """Add two money amounts using + operator"""
        return self.add(other)

    def __mul__(self, factor: Union[int, float, Decimal]) -> "Money":
        """Multiply money by a factor using * operator"""
        return self.multiply(factor)

    def __rmul__(self, factor: Union[int, float, Decimal]) -> "Money":
        """Reverse multiply for factor * money"""
        return self.multiply(factor)
