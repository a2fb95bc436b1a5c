"""Django ORM implementation of the discount and reservation stores."""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal

from django.db import IntegrityError, transaction

from discounts import models
from discounts.domain import (
    AppliesTo,
    Attendee,
    Discount,
    DiscountId,
    DiscountType,
    EventId,
    Member,
    Money,
    OrderItem,
    PriceModification,
    ReservationContext,
    ReservationId,
    UsageLimit,
    ValidityWindow,
)
from discounts.domain.errors import DuplicateCodeError
from discounts.stores.interfaces import DiscountStore, ReservationStore
from tickets.models import Reservation


def discount_to_domain(row: models.Discount) -> Discount:
    return Discount(
        id=DiscountId(row.id),
        code=row.code,
        title=row.title,
        description=row.description,
        amount=Money(row.amount),
        discount_type=DiscountType(row.discount_type),
        applies_to=AppliesTo(row.applies_to),
        usage_limit=UsageLimit(row.max_uses),
        validity=ValidityWindow(starts=row.valid_from, ends=row.valid_till),
        once_per_email=row.once_per_email,
        restricted_ticket_types=frozenset(row.ticket_types or ()),
        restricted_groups=frozenset(group.pk for group in row.groups.all()),
        restricted_events=frozenset(EventId(event.pk) for event in row.events.all()),
    )


def modification_to_domain(row: models.PriceModification) -> PriceModification:
    return PriceModification(
        discount_id=DiscountId(row.discount_id),
        reservation_id=ReservationId(row.reservation_id),
        code=row.discount.code,
        applied_amount=row.applied_amount,
        created_at=row.created_at,
    )


class DjangoDiscountStore(DiscountStore):
    """Database-backed discount store using Django ORM."""

    def _queryset(self):
        return models.Discount.objects.prefetch_related("groups", "events")

    def get_by_code(self, code: str) -> Discount | None:
        row = self._queryset().filter(code=code).first()
        if row is None:
            return None
        return discount_to_domain(row)

    def code_exists(self, code: str) -> bool:
        return models.Discount.objects.filter(code=code).exists()

    def create(self, discount: Discount) -> Discount:
        try:
            with transaction.atomic():
                row = models.Discount.objects.create(
                    id=discount.id.value,
                    code=discount.code,
                    title=discount.title,
                    description=discount.description,
                    amount=discount.amount.amount,
                    discount_type=discount.discount_type.value,
                    applies_to=discount.applies_to.value,
                    max_uses=discount.usage_limit.value,
                    valid_from=discount.validity.starts,
                    valid_till=discount.validity.ends,
                    once_per_email=discount.once_per_email,
                    ticket_types=sorted(discount.restricted_ticket_types),
                )
                row.groups.set(discount.restricted_groups)
                row.events.set([event_id.value for event_id in discount.restricted_events])
        except IntegrityError as exc:
            raise DuplicateCodeError() from exc
        return discount_to_domain(self._queryset().get(pk=row.pk))

    def count_modifications(self, discount_id: DiscountId) -> int:
        return models.PriceModification.objects.filter(discount_id=discount_id.value).count()

    def email_has_redeemed(self, discount_id: DiscountId, email: str) -> bool:
        return models.PriceModification.objects.filter(
            discount_id=discount_id.value,
            reservation__email=email,
        ).exists()

    def add_modification(self, modification: PriceModification) -> None:
        models.PriceModification.objects.create(
            discount_id=modification.discount_id.value,
            reservation_id=modification.reservation_id.value,
            applied_amount=modification.applied_amount,
            created_at=modification.created_at,
        )

    @contextmanager
    def locked(self, code: str) -> Iterator[None]:
        with transaction.atomic():
            # Row lock on PostgreSQL; SQLite serializes through BEGIN IMMEDIATE.
            list(models.Discount.objects.select_for_update().filter(code=code).only("pk"))
            yield


class DjangoReservationStore(ReservationStore):
    """Reads reservations from the tickets app."""

    def get_reservation(self, reservation_id: ReservationId) -> ReservationContext | None:
        row = (
            Reservation.objects.select_related("event")
            .prefetch_related(
                "attendees__member__groups",
                "order_items__ticket_type",
                "price_modifications__discount",
            )
            .filter(pk=reservation_id.value)
            .first()
        )
        if row is None:
            return None

        attendees = []
        for attendee in row.attendees.all():
            member = None
            if attendee.member is not None:
                member = Member(
                    id=attendee.member.pk,
                    group_ids=frozenset(group.pk for group in attendee.member.groups.all()),
                )
            attendees.append(Attendee(name=attendee.name, member=member))

        return ReservationContext(
            id=ReservationId(row.id),
            email=row.email,
            event_id=EventId(row.event_id),
            total=row.total,
            attendees=tuple(attendees),
            order_items=tuple(
                OrderItem(
                    buyable_type=item.ticket_type.buyable_type,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in row.order_items.all()
            ),
            modifications=tuple(
                modification_to_domain(modification)
                for modification in row.price_modifications.all()
            ),
            discounts_enabled=not row.event.disable_discount_field,
        )

    def save_total(self, reservation_id: ReservationId, total: Decimal) -> None:
        Reservation.objects.filter(pk=reservation_id.value).update(total=total)
