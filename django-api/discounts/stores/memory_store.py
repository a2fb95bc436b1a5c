"""In-memory store, used by service tests and local tooling."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal

from discounts.domain import Discount, DiscountId, PriceModification, ReservationContext, ReservationId
from discounts.domain.errors import DuplicateCodeError
from discounts.stores.interfaces import DiscountStore, ReservationStore

logger = logging.getLogger(__name__)


class InMemoryStore(DiscountStore, ReservationStore):
    """Keeps discounts, reservations and modifications in dicts.

    ``locked`` takes a per-code lock and restores the previous state of
    modifications and reservations if the block raises.
    """

    def __init__(self) -> None:
        self.discounts: dict[str, Discount] = {}
        self.reservations: dict[ReservationId, ReservationContext] = {}
        self.modifications: list[PriceModification] = []

        self._guard = threading.Lock()
        self._code_locks: dict[str, threading.Lock] = {}

    # Seed helpers
    def add_discount(self, discount: Discount) -> Discount:
        return self.create(discount)

    def add_reservation(self, reservation: ReservationContext) -> ReservationContext:
        self.reservations[reservation.id] = reservation
        return reservation

    def get_by_code(self, code: str) -> Discount | None:
        return self.discounts.get(code)

    def code_exists(self, code: str) -> bool:
        return code in self.discounts

    def create(self, discount: Discount) -> Discount:
        if discount.code in self.discounts:
            raise DuplicateCodeError()
        self.discounts[discount.code] = discount
        return discount

    def count_modifications(self, discount_id: DiscountId) -> int:
        return sum(1 for m in self.modifications if m.discount_id == discount_id)

    def email_has_redeemed(self, discount_id: DiscountId, email: str) -> bool:
        for modification in self.modifications:
            if modification.discount_id != discount_id:
                continue
            reservation = self.reservations.get(modification.reservation_id)
            if reservation is not None and reservation.email == email:
                return True
        return False

    def add_modification(self, modification: PriceModification) -> None:
        self.modifications.append(modification)
        reservation = self.reservations.get(modification.reservation_id)
        if reservation is not None:
            self.reservations[reservation.id] = replace(
                reservation, modifications=reservation.modifications + (modification,)
            )

    def get_reservation(self, reservation_id: ReservationId) -> ReservationContext | None:
        return self.reservations.get(reservation_id)

    def save_total(self, reservation_id: ReservationId, total: Decimal) -> None:
        self.reservations[reservation_id] = replace(self.reservations[reservation_id], total=total)

    def _lock_for(self, code: str) -> threading.Lock:
        with self._guard:
            return self._code_locks.setdefault(code, threading.Lock())

    @contextmanager
    def locked(self, code: str) -> Iterator[None]:
        with self._lock_for(code):
            modifications = list(self.modifications)
            reservations = dict(self.reservations)
            try:
                yield
            except Exception:
                logger.debug("Rolling back in-memory changes for code %s", code)
                self.modifications = modifications
                self.reservations = reservations
                raise
