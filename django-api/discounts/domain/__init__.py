from discounts.domain.models import (
    Attendee,
    Discount,
    Member,
    OrderItem,
    PriceModification,
    PriceModifier,
    ReservationContext,
)
from discounts.domain.pricing import PriceAdjustment, calculate_total
from discounts.domain.value_objects import (
    AppliesTo,
    DiscountId,
    DiscountType,
    EventId,
    Money,
    ReservationId,
    UsageLimit,
    ValidityWindow,
)

__all__ = [
    "Attendee",
    "Discount",
    "Member",
    "OrderItem",
    "PriceModification",
    "PriceModifier",
    "ReservationContext",
    "PriceAdjustment",
    "calculate_total",
    "AppliesTo",
    "DiscountId",
    "DiscountType",
    "EventId",
    "Money",
    "ReservationId",
    "UsageLimit",
    "ValidityWindow",
]
