# store/admin.py

from django.contrib import admin

from store.models import Store, StoreUser


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "tax_billing", "is_active", "created_at")
    search_fields = ("name", "code")
    list_filter = ("is_active", "tax_billing")


@admin.register(StoreUser)
class StoreUserAdmin(admin.ModelAdmin):
    list_display = ("store", "user", "role", "created_at")
    search_fields = ("store__name", "user__username")
    list_filter = ("role",)
