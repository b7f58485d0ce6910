# billing/filters.py

import django_filters
from django.db.models import Q

from billing.models import Bill
from billing.services.bill_query import SORT_ORDERING

SORT_CHOICES = [(k, k) for k in SORT_ORDERING]


def expose_range_filters(filterset_class):
    """Publish the range filters as ?from= / ?to= (from is a Python keyword)."""
    filters = filterset_class.base_filters
    filters["from"] = filters.pop("billed_from")
    filters["to"] = filters.pop("billed_to")
    return filterset_class


@expose_range_filters
class BillFilter(django_filters.FilterSet):
    """
    Query params:
    - from / to : billing_timestamp range (ISO 8601)
    - status    : paid | partial | unpaid | deleted
    - q         : customer name / phone or invoice number (contains)
    - sort      : date_asc | date_desc | amount_asc | amount_desc
    """

    billed_from = django_filters.IsoDateTimeFilter(
        field_name="billing_timestamp", lookup_expr="gte"
    )
    billed_to = django_filters.IsoDateTimeFilter(
        field_name="billing_timestamp", lookup_expr="lte"
    )
    status = django_filters.ChoiceFilter(choices=Bill.STATUS_CHOICES)
    q = django_filters.CharFilter(method="filter_search")
    sort = django_filters.ChoiceFilter(choices=SORT_CHOICES, method="filter_sort")

    class Meta:
        model = Bill
        fields = ["status"]

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(customer__name__icontains=term)
            | Q(customer__phone_number__icontains=term)
            | Q(invoice_number__icontains=term)
        )

    def filter_sort(self, queryset, name, value):
        return queryset.order_by(*SORT_ORDERING[value])


@expose_range_filters
class CustomerBillFilter(BillFilter):
    due_only = django_filters.BooleanFilter(method="filter_due_only")

    class Meta(BillFilter.Meta):
        fields = ["status"]

    def filter_due_only(self, queryset, name, value):
        if value:
            return queryset.filter(dues__gt=0)
        return queryset
