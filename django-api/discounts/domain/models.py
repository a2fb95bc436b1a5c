"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in discounts/models.py and tickets/models.py
(persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Protocol

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


@dataclass(frozen=True)
class Member:
    """A registered user linked to an attendee, with the groups it belongs to."""

    id: int
    group_ids: frozenset[int] = frozenset()


@dataclass(frozen=True)
class Attendee:
    name: str
    member: Member | None = None


@dataclass(frozen=True)
class OrderItem:
    """A reservation line item; ``buyable_type`` tags the kind of ticket bought."""

    buyable_type: str
    quantity: int = 1
    price: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class PriceModification:
    """Immutable record of one discount applied to one reservation."""

    discount_id: DiscountId
    reservation_id: ReservationId
    code: str
    applied_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ReservationContext:
    """Read view of a reservation as seen by the discount rules."""

    id: ReservationId
    email: str
    event_id: EventId
    total: Decimal
    attendees: tuple[Attendee, ...] = ()
    order_items: tuple[OrderItem, ...] = ()
    modifications: tuple[PriceModification, ...] = ()
    discounts_enabled: bool = True

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)

    def modification_for(self, code: str) -> PriceModification | None:
        """Return the modification already recorded for ``code``, if any."""
        for modification in self.modifications:
            if modification.code == code:
                return modification
        return None

    def with_modification(self, modification: PriceModification, total: Decimal) -> "ReservationContext":
        """Return a copy with ``modification`` appended and the total replaced."""
        return replace(
            self,
            modifications=self.modifications + (modification,),
            total=total,
        )


class PriceModifier(Protocol):
    """Anything that can adjust a reservation's running total."""

    def apply(self, running_total: Decimal, reservation: ReservationContext) -> PriceAdjustment: ...


@dataclass(frozen=True)
class Discount:
    """Domain representation of a Discount (coupon).

    Each ``allows_*`` method is a single eligibility rule. The order they are
    evaluated in is owned by ``DiscountService.validate``.
    """

    id: DiscountId
    code: str
    amount: Money
    discount_type: DiscountType = DiscountType.PRICE
    applies_to: AppliesTo = AppliesTo.CART
    usage_limit: UsageLimit = UsageLimit()
    validity: ValidityWindow = ValidityWindow()
    title: str = ""
    description: str = ""
    once_per_email: bool = False
    restricted_ticket_types: frozenset[str] = frozenset()
    restricted_groups: frozenset[int] = frozenset()
    restricted_events: frozenset[EventId] = frozenset()

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Discount code cannot be empty")
        if not self.title:
            object.__setattr__(self, "title", self.code)

    def allows_uses(self, uses: int) -> bool:
        return self.usage_limit.allows(uses)

    def is_valid_at(self, moment: datetime) -> bool:
        return self.validity.contains(moment)

    def allows_event(self, event_id: EventId) -> bool:
        if not self.restricted_events:
            return True
        return event_id in self.restricted_events

    def allows_email(self, already_redeemed: bool) -> bool:
        if not self.once_per_email:
            return True
        return not already_redeemed

    def allows_order_items(self, order_items: Iterable[OrderItem]) -> bool:
        if not self.restricted_ticket_types:
            return True
        return any(item.buyable_type in self.restricted_ticket_types for item in order_items)

    def allows_member(self, member: Member | None) -> bool:
        if not self.restricted_groups:
            return True
        if member is None:
            return False
        return not self.restricted_groups.isdisjoint(member.group_ids)

    def allows_attendees(self, attendees: Iterable[Attendee]) -> bool:
        """True if any attendee's linked member is in a restricted group."""
        if not self.restricted_groups:
            return True
        for attendee in attendees:
            if attendee.member is not None and self.allows_member(attendee.member):
                return True
        return False

    def apply(self, running_total: Decimal, reservation: ReservationContext) -> PriceAdjustment:
        return calculate_total(
            discount_type=self.discount_type,
            applies_to=self.applies_to,
            amount=self.amount.amount,
            running_total=running_total,
            attendee_count=reservation.attendee_count,
        )
