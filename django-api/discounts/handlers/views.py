"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from uuid import UUID

from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from discounts.clock import SystemClock
from discounts.conf import get_setting
from discounts.domain import ReservationId
from discounts.domain.errors import DiscountNotFoundError, DomainError, ErrorCode
from discounts.handlers.serializers import (
    DiscountSerializer,
    RedeemDiscountSerializer,
    ReservationTotalSerializer,
    ValidateDiscountSerializer,
)
from discounts.services import DiscountService
from discounts.stores.django_store import DjangoDiscountStore, DjangoReservationStore

ERROR_STATUS = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RESERVATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DISCOUNTS_DISABLED: status.HTTP_403_FORBIDDEN,
}


def get_discount_service() -> DiscountService:
    return DiscountService(
        store=DjangoDiscountStore(),
        reservations=DjangoReservationStore(),
        clock=SystemClock(),
        code_prefix=get_setting("CODE_PREFIX"),
        code_attempts=get_setting("CODE_GENERATION_ATTEMPTS"),
    )


def error_response(error: DomainError) -> Response:
    body = {
        "error": {
            "code": error.code.value,
            "message": error.message,
            "field": error.field_name,
        }
    }
    return Response(body, status=ERROR_STATUS.get(error.code, status.HTTP_422_UNPROCESSABLE_ENTITY))


class RedeemDiscountView(APIView):
    """Handler for POST /api/reservations/{reservation_id}/discount"""

    def post(self, request: Request, reservation_id: UUID) -> Response:
        serializer = RedeemDiscountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            reservation = get_discount_service().redeem(
                serializer.validated_data.get("code"), ReservationId(reservation_id)
            )
        except DomainError as error:
            return error_response(error)

        if reservation is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(ReservationTotalSerializer(reservation).data, status=status.HTTP_201_CREATED)


class ValidateDiscountView(APIView):
    """Handler for POST /api/discounts/validate"""

    def post(self, request: Request) -> Response:
        serializer = ValidateDiscountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            discount = get_discount_service().validate_for_reservation(
                serializer.validated_data["code"],
                ReservationId(serializer.validated_data["reservation_id"]),
            )
        except DomainError as error:
            return error_response(error)

        return Response(DiscountSerializer(discount).data)


class DiscountDetailView(APIView):
    """Handler for GET /api/discounts/{code}"""

    permission_classes = [IsAdminUser]

    def get(self, request: Request, code: str) -> Response:
        store = DjangoDiscountStore()
        discount = store.get_by_code(code)
        if discount is None:
            return error_response(DiscountNotFoundError())
        data = DiscountSerializer(discount).data
        data["uses"] = store.count_modifications(discount.id)
        return Response(data)
