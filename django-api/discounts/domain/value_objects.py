"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self
from uuid import UUID

CENTS = Decimal("0.01")
UNLIMITED_USES = -1


class DiscountType(str, Enum):
    PRICE = "PRICE"
    PERCENTAGE = "PERCENTAGE"


class AppliesTo(str, Enum):
    CART = "CART"
    EACH_TICKET = "EACH_TICKET"


def quantize_cents(value: Decimal) -> Decimal:
    """Round a monetary value to two decimal places."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DiscountId:
    """Unique identifier for a Discount."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class ReservationId:
    """Unique identifier for a Reservation."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class EventId:
    """Unique identifier for a ticketed Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class UsageLimit:
    """Maximum number of redemptions; -1 means unlimited."""

    value: int = 1

    def __post_init__(self) -> None:
        if self.value < UNLIMITED_USES:
            raise ValueError("Usage limit must be -1 (unlimited) or a non-negative integer")

    @property
    def is_unlimited(self) -> bool:
        return self.value == UNLIMITED_USES

    def allows(self, uses: int) -> bool:
        # uses <= limit: one redemption past the cap is accepted.
        if self.is_unlimited:
            return True
        return uses <= self.value


@dataclass(frozen=True)
class ValidityWindow:
    """Optional open interval in which a discount may be redeemed.

    Both bounds are exclusive: a discount becomes usable strictly after
    ``starts`` and stops being usable at ``ends``.
    """

    starts: datetime | None = None
    ends: datetime | None = None

    def __post_init__(self) -> None:
        if self.starts is not None and self.ends is not None and self.starts >= self.ends:
            raise ValueError("Validity window must start before it ends")

    def contains(self, moment: datetime) -> bool:
        if self.starts is not None and not moment > self.starts:
            return False
        if self.ends is not None and not moment < self.ends:
            return False
        return True
