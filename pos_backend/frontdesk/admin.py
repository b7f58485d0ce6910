# frontdesk/admin.py

from django.contrib import admin

from frontdesk.models import (
    Appointment,
    AppointmentService,
    Booking,
    BookingItem,
    Enquiry,
    EnquiryDetail,
)

# advance_amount is ledger-backed; edits go through the API so the ledger follows.
LEDGER_FIELDS = ("customer", "advance_amount", "payable_amount", "total_amount")


class AppointmentServiceInline(admin.TabularInline):
    model = AppointmentService
    extra = 0
    fields = ("service", "staff_id", "position")


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = (
        "customer_name",
        "phone_number",
        "appointment_date",
        "appointment_time",
        "status",
        "advance_amount",
        "store",
    )
    list_filter = ("status", "store")
    search_fields = ("customer_name", "phone_number")
    readonly_fields = LEDGER_FIELDS + ("created_at", "updated_at")
    inlines = [AppointmentServiceInline]


class BookingItemInline(admin.TabularInline):
    model = BookingItem
    extra = 0
    fields = ("service", "service_name", "unit_price", "quantity", "staff_name", "venue")


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "customer_name",
        "phone_number",
        "booking_datetime",
        "venue_type",
        "status",
        "total_amount",
        "advance_amount",
    )
    list_filter = ("status", "venue_type", "store")
    search_fields = ("customer_name", "phone_number")
    readonly_fields = LEDGER_FIELDS + ("created_at", "updated_at", "deleted_at")
    inlines = [BookingItemInline]


class EnquiryDetailInline(admin.TabularInline):
    model = EnquiryDetail
    extra = 0


@admin.register(Enquiry)
class EnquiryAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_no", "source", "enquiry_type", "enquiry_status", "created_at")
    list_filter = ("enquiry_status", "enquiry_type", "source", "store")
    search_fields = ("name", "contact_no", "email")
    readonly_fields = ("customer", "advance_amount", "created_at", "updated_at")
    inlines = [EnquiryDetailInline]
