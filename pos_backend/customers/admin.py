# customers/admin.py

from django.contrib import admin

from customers.models import Customer, WalletHistoryEntry


# ======================================================
# CUSTOMER ADMIN
# ======================================================


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "phone_number",
        "store",
        "advance_amount",
        "dues",
        "status",
        "created_at",
    )
    # Balance only moves through the ledger service
    readonly_fields = ("referral_code", "advance_amount", "created_at", "updated_at")
    search_fields = ("name", "phone_number", "referral_code")
    list_filter = ("status", "store")


# ======================================================
# WALLET HISTORY ADMIN (append-only)
# ======================================================


@admin.register(WalletHistoryEntry)
class WalletHistoryEntryAdmin(admin.ModelAdmin):
    list_display = (
        "customer",
        "transaction_type",
        "amount",
        "reference_type",
        "reference_id",
        "created_at",
    )
    readonly_fields = (
        "customer",
        "amount",
        "transaction_type",
        "reference_type",
        "reference_id",
        "description",
        "created_by",
        "created_at",
    )
    search_fields = ("customer__phone_number", "customer__name", "description")
    list_filter = ("transaction_type", "reference_type")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
