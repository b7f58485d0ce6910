# catalog/admin.py

from django.contrib import admin

from catalog.models import Membership, Product, Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "price", "duration_minutes", "is_active")
    search_fields = ("name",)
    list_filter = ("is_active", "store")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "sku", "price", "is_active")
    search_fields = ("name", "sku")
    list_filter = ("is_active", "store")


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "price", "validity_days", "is_active")
    search_fields = ("name",)
    list_filter = ("is_active", "store")
