# billing/urls.py

from django.urls import path

from billing.views import (
    BillDeleteView,
    BillDetailView,
    BillListCreateView,
    CustomerBillsView,
    HeldBillDetailView,
    HeldBillListView,
    HoldBillView,
)

urlpatterns = [
    path("bills/", BillListCreateView.as_view(), name="bill-list"),
    path("bills/delete/", BillDeleteView.as_view(), name="bill-delete"),
    path("bills/hold/", HoldBillView.as_view(), name="bill-hold"),
    path("bills/held/", HeldBillListView.as_view(), name="held-bill-list"),
    path("bills/held/<uuid:held_id>/", HeldBillDetailView.as_view(), name="held-bill-detail"),
    path("bills/<uuid:bill_id>/", BillDetailView.as_view(), name="bill-detail"),
    path(
        "customers/<uuid:customer_id>/bills/",
        CustomerBillsView.as_view(),
        name="customer-bills",
    ),
]
