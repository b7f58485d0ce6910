# frontdesk/apps.py

"""
FRONT DESK APP CONFIG

Appointments, bookings and enquiries. Each may take an upfront advance,
which is credited to the customer's advance balance through the ledger.
"""

from django.apps import AppConfig


class FrontdeskConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "frontdesk"
    verbose_name = "Front desk"
