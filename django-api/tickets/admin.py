from django.contrib import admin

from tickets.models import Attendee, Event, OrderItem, Reservation, TicketType


class TicketTypeInline(admin.TabularInline):
    model = TicketType
    extra = 1


class AttendeeInline(admin.TabularInline):
    model = Attendee
    extra = 1


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 1


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "disable_discount_field", "created_at"]
    search_fields = ["name", "location"]
    inlines = [TicketTypeInline]


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ["email", "event", "total", "created_at"]
    list_filter = ["event"]
    search_fields = ["email"]
    inlines = [AttendeeInline, OrderItemInline]
