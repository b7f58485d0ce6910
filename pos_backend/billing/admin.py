# billing/admin.py

from django.contrib import admin

from billing.models import Bill, BillItem, BillPayment, HeldBill


class BillItemInline(admin.TabularInline):
    model = BillItem
    extra = 0
    can_delete = False
    fields = (
        "line_no",
        "item_type",
        "name",
        "qty",
        "pricing_mode",
        "unit_price",
        "discount_amount",
        "cgst_rate",
        "sgst_rate",
        "tax_amount",
        "line_total",
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class BillPaymentInline(admin.TabularInline):
    model = BillPayment
    extra = 0
    can_delete = False
    fields = ("mode", "amount", "reference", "timestamp", "wallet_entry")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# ======================================================
# BILL ADMIN (read-only; bills are created by the billing service)
# ======================================================


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_number",
        "store",
        "customer",
        "grand_total",
        "paid_amount",
        "dues",
        "status",
        "billing_timestamp",
    )
    list_filter = ("status", "payment_mode", "store")
    search_fields = ("invoice_number", "customer__name", "customer__phone_number")
    date_hierarchy = "billing_timestamp"
    inlines = [BillItemInline, BillPaymentInline]

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(HeldBill)
class HeldBillAdmin(admin.ModelAdmin):
    list_display = ("customer_summary", "store", "amount_estimate", "created_at")
    list_filter = ("store",)
    readonly_fields = (
        "store",
        "payload",
        "customer_summary",
        "amount_estimate",
        "idempotency_key",
        "created_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False
