"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.contrib.auth.models import Group
from django.core.exceptions import ValidationError
from django.db import models

from tickets.models import Event, Reservation


class Discount(models.Model):
    """Persistence model for coupon discounts."""

    class DiscountType(models.TextChoices):
        PRICE = "PRICE", "Price"
        PERCENTAGE = "PERCENTAGE", "Percentage"

    class AppliesTo(models.TextChoices):
        CART = "CART", "Cart"
        EACH_TICKET = "EACH_TICKET", "Each ticket"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(
        max_length=255,
        unique=True,
        blank=True,
        help_text="The code can be customised",
    )
    title = models.CharField(max_length=255, blank=True)
    description = models.TextField(
        blank=True,
        help_text="The description is only visible in the admin",
    )
    discount_type = models.CharField(
        max_length=20, choices=DiscountType.choices, default=DiscountType.PRICE
    )
    applies_to = models.CharField(
        max_length=20, choices=AppliesTo.choices, default=AppliesTo.CART
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    max_uses = models.IntegerField(default=1, help_text='Set to "-1" for unlimited uses')
    valid_from = models.DateTimeField(null=True, blank=True)
    valid_till = models.DateTimeField(null=True, blank=True)
    once_per_email = models.BooleanField(default=False)
    ticket_types = models.JSONField(default=list, blank=True)
    groups = models.ManyToManyField(Group, blank=True, related_name="discounts")
    events = models.ManyToManyField(Event, blank=True, related_name="discounts")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-valid_from"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0), name="discount_amount_non_negative"
            ),
            models.CheckConstraint(
                condition=models.Q(max_uses__gte=-1), name="discount_max_uses_valid"
            ),
        ]

    def __str__(self) -> str:
        return self.title or self.code

    def clean(self) -> None:
        if self.valid_from and self.valid_till and self.valid_from >= self.valid_till:
            raise ValidationError({"valid_till": "Valid till must be after valid from."})

    @property
    def uses(self) -> int:
        return self.modifications.count()


class PriceModification(models.Model):
    """Snapshot of a discount applied to a reservation.

    Rows are written once at redemption and never updated; the count of rows
    per discount is its number of uses.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    discount = models.ForeignKey(
        Discount, on_delete=models.CASCADE, related_name="modifications"
    )
    reservation = models.ForeignKey(
        Reservation, on_delete=models.CASCADE, related_name="price_modifications"
    )
    applied_amount = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["discount", "reservation"], name="discount_once_per_reservation"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.discount.code} - {self.applied_amount}"
