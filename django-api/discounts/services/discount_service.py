"""Discount service - all business logic lives here.

Services:
- Depend only on interfaces (stores) and an injected clock
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from discounts.clock import Clock
from discounts.domain import (
    AppliesTo,
    Discount,
    DiscountId,
    DiscountType,
    EventId,
    Money,
    PriceModification,
    ReservationContext,
    ReservationId,
    UsageLimit,
    ValidityWindow,
)
from discounts.domain.codes import generate_code
from discounts.domain.errors import (
    AlreadyUsedByEmailError,
    CodeGenerationError,
    DiscountExpiredError,
    DiscountNotFoundError,
    DiscountsDisabledError,
    DiscountUsedError,
    DiscountValidationError,
    DuplicateCodeError,
    EventNotAllowedError,
    MemberNotAllowedError,
    ReservationNotFoundError,
    TicketTypeNotAllowedError,
)
from discounts.stores.interfaces import DiscountStore, ReservationStore

logger = logging.getLogger(__name__)


class DiscountService:
    """Service for coupon validation, redemption and creation."""

    def __init__(
        self,
        store: DiscountStore,
        reservations: ReservationStore,
        clock: Clock,
        code_prefix: str = "",
        code_attempts: int = 5,
    ) -> None:
        self._store = store
        self._reservations = reservations
        self._clock = clock
        self._code_prefix = code_prefix
        self._code_attempts = code_attempts

    def validate(self, code: str, reservation: ReservationContext) -> Discount:
        """Run the coupon checks in order and return the matching discount.

        Raises:
            DiscountNotFoundError: No discount has exactly this code.
            DiscountUsedError: The usage limit is exhausted.
            DiscountExpiredError: Now is outside the validity window.
            EventNotAllowedError: The reservation's event is not in the allowed events.
            AlreadyUsedByEmailError: A once-per-email discount was used by this email.
            TicketTypeNotAllowedError: No order item has an allowed ticket type.
            MemberNotAllowedError: No attendee's member is in an allowed group.
        """
        discount = self._store.get_by_code(code)
        if discount is None:
            raise self._reject(code, DiscountNotFoundError())

        uses = self._store.count_modifications(discount.id)
        logger.debug("Discount %s has %d uses", code, uses)
        if not discount.allows_uses(uses):
            raise self._reject(code, DiscountUsedError())

        if not discount.is_valid_at(self._clock.now()):
            raise self._reject(code, DiscountExpiredError())

        if not discount.allows_event(reservation.event_id):
            raise self._reject(code, EventNotAllowedError())

        if discount.once_per_email:
            redeemed = self._store.email_has_redeemed(discount.id, reservation.email)
            if not discount.allows_email(redeemed):
                raise self._reject(code, AlreadyUsedByEmailError())

        if not discount.allows_order_items(reservation.order_items):
            raise self._reject(code, TicketTypeNotAllowedError())

        if not discount.allows_attendees(reservation.attendees):
            raise self._reject(code, MemberNotAllowedError())

        logger.debug("Discount %s passed all checks", code)
        return discount

    def validate_for_reservation(self, code: str, reservation_id: ReservationId) -> Discount:
        """Run the coupon checks against a stored reservation without applying.

        Raises:
            ReservationNotFoundError: If the reservation does not exist.
            DiscountsDisabledError: If the reservation's event disables coupons.
            DiscountValidationError: If one of the coupon checks fails.
        """
        return self.validate(code, self._load_reservation(reservation_id))

    def redeem(self, code: str | None, reservation_id: ReservationId) -> ReservationContext | None:
        """Validate ``code`` and apply it to the reservation.

        Returns the reservation with the new modification and total, or None
        without touching the reservation when no code is given. A code that is
        already applied to the reservation returns it unchanged.
        Lookup, checks, the snapshot write and the new total commit together.

        Raises:
            ReservationNotFoundError: If the reservation does not exist.
            DiscountsDisabledError: If the reservation's event disables coupons.
            DiscountValidationError: If one of the coupon checks fails.
        """
        if not code:
            return None

        with self._store.locked(code):
            reservation = self._load_reservation(reservation_id)
            if reservation.modification_for(code) is not None:
                logger.info(
                    "Discount %s already applied to reservation %s", code, reservation_id.value
                )
                return reservation

            discount = self.validate(code, reservation)
            adjustment = discount.apply(reservation.total, reservation)
            modification = PriceModification(
                discount_id=discount.id,
                reservation_id=reservation.id,
                code=discount.code,
                applied_amount=adjustment.applied_amount,
                created_at=self._clock.now(),
            )
            self._store.add_modification(modification)
            self._reservations.save_total(reservation.id, adjustment.new_total)

        logger.info(
            "Applied discount %s to reservation %s: -%s (total %s -> %s)",
            code,
            reservation_id.value,
            adjustment.applied_amount,
            reservation.total,
            adjustment.new_total,
        )
        return reservation.with_modification(modification, adjustment.new_total)

    def create_discount(
        self,
        amount: Decimal,
        discount_type: DiscountType = DiscountType.PRICE,
        applies_to: AppliesTo = AppliesTo.CART,
        code: str | None = None,
        max_uses: int = 1,
        valid_from: datetime | None = None,
        valid_till: datetime | None = None,
        title: str = "",
        description: str = "",
        once_per_email: bool = False,
        ticket_types: frozenset[str] = frozenset(),
        group_ids: frozenset[int] = frozenset(),
        event_ids: frozenset[EventId] = frozenset(),
    ) -> Discount:
        """Create a discount, generating a code when none is given.

        Raises:
            ValueError: If the configuration breaks a domain invariant.
            DuplicateCodeError: If an explicit code is already taken.
            CodeGenerationError: If every generated code collided.
        """

        def build(discount_code: str) -> Discount:
            return Discount(
                id=DiscountId(uuid.uuid4()),
                code=discount_code,
                amount=Money(amount),
                discount_type=discount_type,
                applies_to=applies_to,
                usage_limit=UsageLimit(max_uses),
                validity=ValidityWindow(starts=valid_from, ends=valid_till),
                title=title,
                description=description,
                once_per_email=once_per_email,
                restricted_ticket_types=frozenset(ticket_types),
                restricted_groups=frozenset(group_ids),
                restricted_events=frozenset(event_ids),
            )

        if code:
            return self._store.create(build(code))

        for attempt in range(1, self._code_attempts + 1):
            candidate = generate_code(self._code_prefix, self._clock.now())
            try:
                discount = self._store.create(build(candidate))
            except DuplicateCodeError:
                logger.warning("Generated code %s collided (attempt %d)", candidate, attempt)
                continue
            logger.info("Created discount %s", discount.code)
            return discount
        raise CodeGenerationError()

    def _load_reservation(self, reservation_id: ReservationId) -> ReservationContext:
        reservation = self._reservations.get_reservation(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError()
        if not reservation.discounts_enabled:
            raise DiscountsDisabledError()
        return reservation

    def _reject(self, code: str, error: DiscountValidationError) -> DiscountValidationError:
        logger.info("Rejected discount %s: %s", code, error.code.value)
        return error
