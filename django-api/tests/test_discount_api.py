"""Integration tests for the discount HTTP endpoints.

Run with: pytest tests/test_discount_api.py -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import Group, User
from django.utils import timezone
from rest_framework.test import APIClient

from discounts import models


def _redeem_url(reservation) -> str:
    return f"/api/reservations/{reservation.id}/discount"


@pytest.mark.django_db
class TestRedeemDiscount:
    """Tests for POST /api/reservations/{id}/discount"""

    def test_applies_discount(self, api_client: APIClient, make_db_reservation):
        """Redeeming a valid code returns 201 with the new total."""
        models.Discount.objects.create(
            code="HALF", amount=Decimal("50"), discount_type=models.Discount.DiscountType.PERCENTAGE
        )
        reservation = make_db_reservation(items=("vip",))

        response = api_client.post(_redeem_url(reservation), {"code": "HALF"})

        assert response.status_code == 201
        assert response.data["total"] == "25.00"
        assert response.data["modifications"][0]["code"] == "HALF"
        assert response.data["modifications"][0]["applied_amount"] == "25.00"
        reservation.refresh_from_db()
        assert reservation.total == Decimal("25.00")

    def test_empty_code_is_not_an_error(self, api_client: APIClient, make_db_reservation):
        """An empty code returns 204 and records nothing."""
        reservation = make_db_reservation()
        response = api_client.post(_redeem_url(reservation), {"code": ""})
        assert response.status_code == 204
        assert not models.PriceModification.objects.exists()

    def test_unknown_code(self, api_client: APIClient, make_db_reservation):
        """An unknown code returns 404 with the error body."""
        reservation = make_db_reservation()
        response = api_client.post(_redeem_url(reservation), {"code": "NOPE"})
        assert response.status_code == 404
        assert response.data["error"] == {
            "code": "NOT_FOUND",
            "message": "The entered coupon is not found",
            "field": "code",
        }

    def test_expired_code(self, api_client: APIClient, make_db_reservation):
        """An expired code returns 422 EXPIRED."""
        models.Discount.objects.create(
            code="OLD", amount=Decimal("5"), valid_till=timezone.now() - timedelta(days=1)
        )
        reservation = make_db_reservation()
        response = api_client.post(_redeem_url(reservation), {"code": "OLD"})
        assert response.status_code == 422
        assert response.data["error"]["code"] == "EXPIRED"

    def test_ticket_type_restriction(self, api_client: APIClient, make_db_reservation):
        """A code for other ticket types returns 422 TICKET_TYPE_NOT_ALLOWED."""
        models.Discount.objects.create(code="VIPONLY", amount=Decimal("5"), ticket_types=["VipTicket"])
        reservation = make_db_reservation(items=("regular",))
        response = api_client.post(_redeem_url(reservation), {"code": "VIPONLY"})
        assert response.status_code == 422
        assert response.data["error"]["code"] == "TICKET_TYPE_NOT_ALLOWED"

    def test_event_disables_discounts(self, api_client: APIClient, make_db_reservation, event):
        """An event with coupons disabled returns 403 on redeem."""
        models.Discount.objects.create(code="SPRING", amount=Decimal("5"))
        event.disable_discount_field = True
        event.save()
        reservation = make_db_reservation()
        response = api_client.post(_redeem_url(reservation), {"code": "SPRING"})
        assert response.status_code == 403
        assert response.data["error"]["code"] == "DISCOUNTS_DISABLED"

    def test_same_code_twice_is_applied_once(self, api_client: APIClient, make_db_reservation):
        """Redeeming the same code again does not discount twice."""
        models.Discount.objects.create(code="SPRING", amount=Decimal("10"), max_uses=-1)
        reservation = make_db_reservation()

        api_client.post(_redeem_url(reservation), {"code": "SPRING"})
        response = api_client.post(_redeem_url(reservation), {"code": "SPRING"})

        assert response.data["total"] == "15.00"
        assert len(response.data["modifications"]) == 1
        assert models.PriceModification.objects.count() == 1

    def test_unknown_reservation(self, api_client: APIClient, db):
        """An unknown reservation returns 404 RESERVATION_NOT_FOUND."""
        response = api_client.post(f"/api/reservations/{uuid.uuid4()}/discount", {"code": "SPRING"})
        assert response.status_code == 404
        assert response.data["error"]["code"] == "RESERVATION_NOT_FOUND"

    def test_once_per_email(self, api_client: APIClient, make_db_reservation):
        """A once-per-email code is refused for the same email only."""
        models.Discount.objects.create(code="ONCE", amount=Decimal("5"), max_uses=-1, once_per_email=True)
        first = make_db_reservation(email="ann@example.com")
        again = make_db_reservation(email="ann@example.com")
        other = make_db_reservation(email="bob@example.com")

        assert api_client.post(_redeem_url(first), {"code": "ONCE"}).status_code == 201
        response = api_client.post(_redeem_url(again), {"code": "ONCE"})
        assert response.data["error"]["code"] == "ALREADY_USED_BY_EMAIL"
        assert api_client.post(_redeem_url(other), {"code": "ONCE"}).status_code == 201


@pytest.mark.django_db
class TestValidateDiscount:
    """Tests for POST /api/discounts/validate"""

    def test_valid_code_returns_discount_without_applying(self, api_client: APIClient, make_db_reservation):
        """Validating a good code returns it and records nothing."""
        models.Discount.objects.create(code="SPRING", amount=Decimal("5"), ticket_types=["Ticket"])
        reservation = make_db_reservation()

        response = api_client.post(
            "/api/discounts/validate", {"code": "SPRING", "reservation_id": str(reservation.id)}
        )

        assert response.status_code == 200
        assert response.data["code"] == "SPRING"
        assert response.data["amount"] == "5.00"
        assert response.data["ticket_types"] == ["Ticket"]
        assert not models.PriceModification.objects.exists()

    def test_group_restriction(self, api_client: APIClient, make_db_reservation):
        """A group restricted code without members returns 422."""
        group = Group.objects.create(name="Members")
        discount = models.Discount.objects.create(code="MEMBERS", amount=Decimal("5"))
        discount.groups.add(group)
        reservation = make_db_reservation(attendees=("Guest",))

        response = api_client.post(
            "/api/discounts/validate", {"code": "MEMBERS", "reservation_id": str(reservation.id)}
        )

        assert response.status_code == 422
        assert response.data["error"]["code"] == "MEMBER_NOT_ALLOWED"

    def test_event_disables_discounts(self, api_client: APIClient, make_db_reservation, event):
        """An event with coupons disabled returns 403 on validate."""
        models.Discount.objects.create(code="SPRING", amount=Decimal("5"))
        event.disable_discount_field = True
        event.save()
        reservation = make_db_reservation()

        response = api_client.post(
            "/api/discounts/validate", {"code": "SPRING", "reservation_id": str(reservation.id)}
        )

        assert response.status_code == 403
        assert response.data["error"]["code"] == "DISCOUNTS_DISABLED"

    def test_unknown_reservation(self, api_client: APIClient, db):
        """Validating against an unknown reservation returns 404."""
        response = api_client.post(
            "/api/discounts/validate", {"code": "SPRING", "reservation_id": str(uuid.uuid4())}
        )
        assert response.status_code == 404
        assert response.data["error"]["code"] == "RESERVATION_NOT_FOUND"

    def test_malformed_request(self, api_client: APIClient, db):
        """A malformed reservation id returns 400."""
        response = api_client.post("/api/discounts/validate", {"code": "SPRING", "reservation_id": "x"})
        assert response.status_code == 400


@pytest.mark.django_db
class TestDiscountDetail:
    """Tests for GET /api/discounts/{code}"""

    def test_requires_staff(self, api_client: APIClient):
        """Anonymous users cannot read discount details."""
        models.Discount.objects.create(code="SPRING", amount=Decimal("5"))
        assert api_client.get("/api/discounts/SPRING").status_code in (401, 403)

    def test_shows_uses(self, api_client: APIClient, make_db_reservation):
        """Staff see the discount with its use count."""
        api_client.force_authenticate(User.objects.create_user(username="admin", is_staff=True))
        models.Discount.objects.create(code="SPRING", amount=Decimal("5"), max_uses=-1)
        api_client.post(_redeem_url(make_db_reservation()), {"code": "SPRING"})

        response = api_client.get("/api/discounts/SPRING")

        assert response.status_code == 200
        assert response.data["uses"] == 1
        assert response.data["max_uses"] == -1
        assert response.data["title"] == "SPRING"

    def test_not_found(self, api_client: APIClient):
        """An unknown code returns 404 for staff."""
        api_client.force_authenticate(User.objects.create_user(username="admin", is_staff=True))
        assert api_client.get("/api/discounts/NOPE").status_code == 404
