# catalog/apps.py

"""
CATALOG APP CONFIG

Read-only catalog of what a store sells:
- services (salon/spa treatments)
- products (retail)
- memberships

Billing only ever reads (id, type) -> (name, price) from here.
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
