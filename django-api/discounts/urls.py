from django.urls import path

from discounts.handlers import DiscountDetailView, RedeemDiscountView, ValidateDiscountView

urlpatterns = [
    path(
        "reservations/<uuid:reservation_id>/discount",
        RedeemDiscountView.as_view(),
        name="reservation-discount",
    ),
    path("discounts/validate", ValidateDiscountView.as_view(), name="discount-validate"),
    path("discounts/<str:code>", DiscountDetailView.as_view(), name="discount-detail"),
]
