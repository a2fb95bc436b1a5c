"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from decimal import Decimal

from discounts.domain import Discount, DiscountId, PriceModification, ReservationContext, ReservationId


class DiscountStore(ABC):
    """Interface for discount persistence operations."""

    @abstractmethod
    def get_by_code(self, code: str) -> Discount | None:
        """Return the discount whose code matches exactly, or None."""
        ...

    @abstractmethod
    def code_exists(self, code: str) -> bool:
        ...

    @abstractmethod
    def create(self, discount: Discount) -> Discount:
        """Persist a new discount.

        Raises:
            DuplicateCodeError: If the code is already taken.
        """
        ...

    @abstractmethod
    def count_modifications(self, discount_id: DiscountId) -> int:
        """Return how many times the discount has been applied."""
        ...

    @abstractmethod
    def email_has_redeemed(self, discount_id: DiscountId, email: str) -> bool:
        """Check if a reservation with ``email`` already carries the discount."""
        ...

    @abstractmethod
    def add_modification(self, modification: PriceModification) -> None:
        """Persist a price modification snapshot."""
        ...

    @abstractmethod
    def locked(self, code: str) -> AbstractContextManager[None]:
        """Open an atomic unit serialized per discount code.

        Reads and writes done on any store inside the block commit together
        or not at all. A second caller using the same code blocks until the
        first leaves the block.
        """
        ...


class ReservationStore(ABC):
    """Interface for the reservation data the discount rules need."""

    @abstractmethod
    def get_reservation(self, reservation_id: ReservationId) -> ReservationContext | None:
        """Return a reservation with attendees, members and order items resolved."""
        ...

    @abstractmethod
    def save_total(self, reservation_id: ReservationId, total: Decimal) -> None:
        ...
