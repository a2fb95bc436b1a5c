"""Django ORM models for the reservation side of the ticket shop.

Discounts read reservations through discounts.stores; nothing here knows
about coupon rules.
"""

import uuid

from django.conf import settings
from django.db import models


class Event(models.Model):
    """Persistence model for ticketed events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    disable_discount_field = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="tickets_eve_created_6d1f0a_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class TicketType(models.Model):
    """Persistence model for something a reservation can buy."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="ticket_types")
    name = models.CharField(max_length=100)
    buyable_type = models.CharField(max_length=100, default="Ticket")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["event"], name="tickets_tic_event_i_2b7c41_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class Reservation(models.Model):
    """Persistence model for a customer's ticket order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="reservations")
    email = models.EmailField()
    total = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["email"], name="tickets_res_email_8e0d93_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.email} - {self.event_id}"


class Attendee(models.Model):
    """A person on a reservation, optionally linked to a registered member."""

    reservation = models.ForeignKey(
        Reservation, on_delete=models.CASCADE, related_name="attendees"
    )
    name = models.CharField(max_length=255)
    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="attendances",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class OrderItem(models.Model):
    """A line item of a reservation."""

    reservation = models.ForeignKey(
        Reservation, on_delete=models.CASCADE, related_name="order_items"
    )
    ticket_type = models.ForeignKey(TicketType, on_delete=models.PROTECT, related_name="+")
    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(max_digits=10, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.quantity} x {self.ticket_type.name}"
