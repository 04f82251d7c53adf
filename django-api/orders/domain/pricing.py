"""Order pricing: subtotal, shipping, tax and total.

Everything here is pure. Amounts are Decimals wrapped in Money; each
component is rounded half-up to cents before the total is summed.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Mapping, Self

from catalog.domain import Money
from orders.domain.value_objects import ShippingAddress

GRAMS_PER_KG = Decimal("1000")


@dataclass(frozen=True)
class PricingPolicy:
    """Shipping tiers and the state tax table."""

    domestic_countries: frozenset[str] = frozenset({"US", "USA"})
    domestic_base_rate: Decimal = Decimal("5.99")
    international_base_rate: Decimal = Decimal("15.99")
    per_kg_rate: Decimal = Decimal("2.00")
    state_tax_rates: Mapping[str, Decimal] = field(default_factory=dict)

    @classmethod
    def from_settings(cls) -> Self:
        from django.conf import settings

        config = settings.ORDER_PRICING
        return cls(
            domestic_countries=frozenset(c.upper() for c in config["DOMESTIC_COUNTRIES"]),
            domestic_base_rate=Decimal(config["DOMESTIC_BASE_RATE"]),
            international_base_rate=Decimal(config["INTERNATIONAL_BASE_RATE"]),
            per_kg_rate=Decimal(config["PER_KG_RATE"]),
            state_tax_rates={
                state.upper(): Decimal(rate) for state, rate in config["STATE_TAX_RATES"].items()
            },
        )

    def base_rate(self, country: str) -> Decimal:
        if country.strip().upper() in self.domestic_countries:
            return self.domestic_base_rate
        return self.international_base_rate

    def tax_rate(self, state: str | None) -> Decimal:
        if not state:
            return Decimal("0")
        return self.state_tax_rates.get(state.strip().upper(), Decimal("0"))


@dataclass(frozen=True)
class PricedLine:
    """A line with the unit price captured at order time."""

    unit_price: Money
    quantity: int
    weight_grams: Decimal | None = None

    @property
    def total(self) -> Money:
        return self.unit_price.times(self.quantity)

    @property
    def total_weight_grams(self) -> Decimal:
        if self.weight_grams is None:
            return Decimal("0")
        return self.weight_grams * self.quantity


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    shipping_fee: Money
    tax: Money
    total: Money


def calculate_shipping_fee(total_weight_grams: Decimal, country: str, policy: PricingPolicy) -> Money:
    """Country tier base rate plus the per-kg rate for every started kilogram."""
    kilograms = math.ceil(total_weight_grams / GRAMS_PER_KG)
    return Money(policy.base_rate(country) + policy.per_kg_rate * kilograms).rounded()


def calculate_tax(subtotal: Money, state: str | None, policy: PricingPolicy) -> Money:
    return subtotal.times(policy.tax_rate(state)).rounded()


def calculate_price(
    product_lines: Iterable[PricedLine],
    ticket_lines: Iterable[PricedLine],
    destination: ShippingAddress | None,
    policy: PricingPolicy,
) -> PriceBreakdown:
    product_lines = list(product_lines)
    ticket_lines = list(ticket_lines)

    subtotal = Money.zero()
    for line in product_lines + ticket_lines:
        subtotal = subtotal + line.total
    subtotal = subtotal.rounded()

    shipping_fee = Money.zero()
    if product_lines and destination is not None:
        weight = sum((line.total_weight_grams for line in product_lines), Decimal("0"))
        shipping_fee = calculate_shipping_fee(weight, destination.country, policy)

    state = destination.state if destination is not None else None
    tax = calculate_tax(subtotal, state, policy)

    return PriceBreakdown(
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        tax=tax,
        total=subtotal + shipping_fee + tax,
    )
