"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from discounts.services import DiscountService
from discounts.stores.memory_store import InMemoryStore
from tests.factories import FixedClock


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(store: InMemoryStore, clock: FixedClock) -> DiscountService:
    return DiscountService(store=store, reservations=store, clock=clock)


@pytest.fixture
def event(db):
    from tickets.models import Event

    return Event.objects.create(name="Spring Gala", location="Amsterdam")


@pytest.fixture
def ticket_types(event):
    from tickets.models import TicketType

    return {
        "regular": TicketType.objects.create(
            event=event, name="Regular", buyable_type="Ticket", price=Decimal("25.00"), quantity=100
        ),
        "vip": TicketType.objects.create(
            event=event, name="VIP", buyable_type="VipTicket", price=Decimal("50.00"), quantity=10
        ),
    }


@pytest.fixture
def make_db_reservation(event, ticket_types):
    """Build a persisted reservation with one regular ticket per attendee."""
    from tickets.models import Attendee, OrderItem, Reservation

    def make(email="ann@example.com", attendees=("Ann",), members=(), items=("regular",)):
        reservation = Reservation.objects.create(event=event, email=email)
        for name in attendees:
            Attendee.objects.create(reservation=reservation, name=name)
        for member in members:
            Attendee.objects.create(reservation=reservation, name=member.username, member=member)
        total = Decimal("0.00")
        for key in items:
            ticket_type = ticket_types[key]
            OrderItem.objects.create(reservation=reservation, ticket_type=ticket_type, price=ticket_type.price)
            total += ticket_type.price
        reservation.total = total
        reservation.save(update_fields=["total"])
        return reservation

    return make
