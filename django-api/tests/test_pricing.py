"""Unit tests for the total calculation.

Percentage and fixed price discounts are tested separately: only the fixed
price branch floors the new total at zero.
Run with: pytest tests/test_pricing.py -v
"""

from decimal import Decimal

import pytest

from discounts.domain import AppliesTo, Attendee, DiscountType, calculate_total
from tests.factories import make_discount, make_reservation


def _apply(discount_type, amount, total, applies_to=AppliesTo.CART, attendees=0):
    return calculate_total(
        discount_type=discount_type,
        applies_to=applies_to,
        amount=Decimal(amount),
        running_total=Decimal(total),
        attendee_count=attendees,
    )


class TestPercentageDiscount:
    """Tests for PERCENTAGE discounts."""

    def test_ten_percent_of_hundred(self):
        """Ten percent of 100 leaves 90."""
        result = _apply(DiscountType.PERCENTAGE, "10", "100")
        assert result.applied_amount == Decimal("10.00")
        assert result.new_total == Decimal("90.00")

    def test_more_than_hundred_percent_goes_negative(self):
        """The percentage branch is not floored at zero."""
        result = _apply(DiscountType.PERCENTAGE, "150", "100")
        assert result.applied_amount == Decimal("150.00")
        assert result.new_total == Decimal("-50.00")

    def test_applies_to_is_ignored(self):
        """Percentage discounts ignore applies_to and attendees."""
        result = _apply(DiscountType.PERCENTAGE, "10", "100", AppliesTo.EACH_TICKET, attendees=4)
        assert result.applied_amount == Decimal("10.00")

    def test_result_is_rounded_to_cents(self):
        """Amounts are rounded half up to cents."""
        result = _apply(DiscountType.PERCENTAGE, "15", "9.99")
        assert result.applied_amount == Decimal("1.50")
        assert result.new_total == Decimal("8.49")


class TestFixedPriceDiscount:
    """Tests for PRICE discounts."""

    def test_each_ticket_multiplies_by_attendees(self):
        """EACH_TICKET multiplies the amount by the attendee count."""
        result = _apply(DiscountType.PRICE, "5", "50", AppliesTo.EACH_TICKET, attendees=3)
        assert result.applied_amount == Decimal("15.00")
        assert result.new_total == Decimal("35.00")

    def test_cart_applies_once(self):
        """CART applies the amount once."""
        result = _apply(DiscountType.PRICE, "5", "50", AppliesTo.CART, attendees=3)
        assert result.applied_amount == Decimal("5.00")
        assert result.new_total == Decimal("45.00")

    def test_total_is_floored_at_zero(self):
        """The applied amount is kept even when it exceeds the total."""
        result = _apply(DiscountType.PRICE, "1000", "10")
        assert result.applied_amount == Decimal("1000.00")
        assert result.new_total == Decimal("0.00")

    @pytest.mark.parametrize("attendees", [0, 1])
    def test_each_ticket_with_few_attendees(self, attendees):
        """EACH_TICKET with zero or one attendee scales accordingly."""
        result = _apply(DiscountType.PRICE, "7.50", "20", AppliesTo.EACH_TICKET, attendees=attendees)
        assert result.applied_amount == Decimal("7.50") * attendees


class TestDiscountApply:
    """Tests for Discount.apply as a price modifier."""

    def test_apply_counts_reservation_attendees(self):
        """Discount.apply takes the attendee count from the reservation."""
        discount = make_discount(
            amount="5", discount_type=DiscountType.PRICE, applies_to=AppliesTo.EACH_TICKET
        )
        reservation = make_reservation(
            total="50", attendees=(Attendee("A"), Attendee("B"), Attendee("C"))
        )
        result = discount.apply(reservation.total, reservation)
        assert result.applied_amount == Decimal("15.00")
        assert result.new_total == Decimal("35.00")
