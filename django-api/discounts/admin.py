from django.contrib import admin
from django.db.models import Count

from discounts.models import Discount, PriceModification


class PriceModificationInline(admin.TabularInline):
    model = PriceModification
    extra = 0
    can_delete = False
    readonly_fields = ["reservation", "applied_amount", "created_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = ["code", "description", "valid_from", "valid_till", "use_count"]
    list_filter = ["discount_type", "once_per_email"]
    search_fields = ["code", "title", "description"]
    filter_horizontal = ["groups", "events"]
    inlines = [PriceModificationInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(use_count=Count("modifications"))

    @admin.display(description="Uses", ordering="use_count")
    def use_count(self, obj):
        return obj.use_count
