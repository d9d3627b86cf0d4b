"""
Order summary value object

Derived subtotal, two equal tax components and total for a list of items.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Protocol

from storefront.domain.value_objects.money import Money

# Each of the two components; 5% tax in total
TAX_COMPONENT_RATE = Decimal("0.025")


class PricedLine(Protocol):
    """Anything with a unit price and a quantity"""

    unit_price: Money
    quantity: int


@dataclass(frozen=True)
class OrderSummary:
    """Order totals shown before submission"""

    subtotal: Money
    regional_tax: Money
    central_tax: Money
    total: Money

    @property
    def tax_total(self) -> Money:
        return self.regional_tax + self.central_tax


def summarize(items: Iterable[PricedLine], currency: str = "INR") -> OrderSummary:
    """
    Compute the order summary for ``items``.

    subtotal = sum(price * quantity); each tax component = subtotal * 0.025;
    total = subtotal + both components. Pure and total over any item list.
    """
    subtotal = Money.zero(currency)
    for item in items:
        subtotal = subtotal + item.unit_price * item.quantity

    component = subtotal * TAX_COMPONENT_RATE
    return OrderSummary(
        subtotal=subtotal,
        regional_tax=component,
        central_tax=component,
        total=subtotal + component + component,
    )
