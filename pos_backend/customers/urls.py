# customers/urls.py

from django.urls import path

from customers.views import CustomerAdvanceView

urlpatterns = [
    path(
        "customers/<uuid:customer_id>/advance/",
        CustomerAdvanceView.as_view(),
        name="customer-advance",
    ),
]
