"""Total calculation for an applied discount."""

from dataclasses import dataclass
from decimal import Decimal

from discounts.domain.value_objects import AppliesTo, DiscountType, quantize_cents

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class PriceAdjustment:
    """Result of applying a discount to a running total."""

    new_total: Decimal
    applied_amount: Decimal


def calculate_total(
    discount_type: DiscountType,
    applies_to: AppliesTo,
    amount: Decimal,
    running_total: Decimal,
    attendee_count: int,
) -> PriceAdjustment:
    """Apply a discount to ``running_total``.

    Percentage discounts are taken over the whole running total and the result
    is not floored, so an amount above 100 yields a negative total. Fixed price
    discounts are taken once per cart or once per attendee and the result is
    floored at zero.
    """
    if discount_type == DiscountType.PERCENTAGE:
        applied = quantize_cents(running_total * amount / Decimal(100))
        return PriceAdjustment(
            new_total=quantize_cents(running_total - applied),
            applied_amount=applied,
        )

    if applies_to == AppliesTo.EACH_TICKET:
        applied = amount * attendee_count
    else:
        applied = amount
    applied = quantize_cents(applied)
    return PriceAdjustment(
        new_total=max(ZERO, quantize_cents(running_total - applied)),
        applied_amount=applied,
    )
