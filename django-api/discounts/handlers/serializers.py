"""Serializers for request input and for transforming domain models to API responses."""

from rest_framework import serializers


class RedeemDiscountSerializer(serializers.Serializer):
    """Input for applying a coupon code to a reservation."""

    code = serializers.CharField(max_length=255, required=False, allow_blank=True, trim_whitespace=False)


class ValidateDiscountSerializer(serializers.Serializer):
    """Input for checking a coupon code without applying it."""

    code = serializers.CharField(max_length=255, trim_whitespace=False)
    reservation_id = serializers.UUIDField()


class DiscountSerializer(serializers.Serializer):
    """Serializer for Discount domain model."""

    code = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    discount_type = serializers.CharField(source="discount_type.value")
    applies_to = serializers.CharField(source="applies_to.value")
    amount = serializers.DecimalField(source="amount.amount", max_digits=10, decimal_places=2)
    max_uses = serializers.IntegerField(source="usage_limit.value")
    valid_from = serializers.DateTimeField(source="validity.starts", allow_null=True)
    valid_till = serializers.DateTimeField(source="validity.ends", allow_null=True)
    once_per_email = serializers.BooleanField()
    ticket_types = serializers.SerializerMethodField()
    groups = serializers.SerializerMethodField()
    events = serializers.SerializerMethodField()

    def get_ticket_types(self, obj) -> list[str]:
        return sorted(obj.restricted_ticket_types)

    def get_groups(self, obj) -> list[int]:
        return sorted(obj.restricted_groups)

    def get_events(self, obj) -> list[str]:
        return sorted(str(event_id.value) for event_id in obj.restricted_events)


class PriceModificationSerializer(serializers.Serializer):
    """Serializer for PriceModification domain model."""

    discount_id = serializers.UUIDField(source="discount_id.value")
    code = serializers.CharField()
    applied_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    created_at = serializers.DateTimeField()


class ReservationTotalSerializer(serializers.Serializer):
    """A reservation's total and the discounts applied to it."""

    id = serializers.UUIDField(source="id.value")
    email = serializers.EmailField()
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    modifications = PriceModificationSerializer(many=True)
