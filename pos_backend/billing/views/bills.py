# billing/views/bills.py

"""
BILL API VIEWS

- POST   bills/                          save a bill (BillingTransaction)
- GET    bills/                          list/search bills
- GET    bills/<bill_id>/                full bill representation
- POST   bills/delete/                   soft delete (no ledger reversal)
- GET    customers/<customer_id>/bills/  customer statement + summary

Hard rules:
- Every route is store-scoped; membership is checked by HasStoreAccess.
- Money is server-owned: totals are recomputed from the catalog, never trusted.
"""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from billing.filters import BillFilter, CustomerBillFilter
from billing.models import Bill
from billing.pagination import BillingPagination
from billing.serializers import (
    BillDetailSerializer,
    BillListItemSerializer,
    CustomerBillSerializer,
    DeleteBillsInputSerializer,
    SaveBillInputSerializer,
)
from billing.services.bill_query import (
    customer_bill_summary,
    get_bill,
    soft_delete_bills,
    store_bills,
)
from billing.services.billing_transaction import save_bill
from billing.views.errors import HANDLED_ERRORS, domain_error_response, idempotency_key_from
from customers.serializers import CustomerSummarySerializer
from customers.services.customer_resolver import get_store_customer
from customers.services.exceptions import CustomerNotFound
from store.permissions import HasStoreAccess

logger = logging.getLogger(__name__)

MAX_BILLS_PER_DELETE = 50


def _include_deleted(request) -> bool:
    return request.query_params.get("status") == Bill.STATUS_DELETED


class BillListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = BillListItemSerializer
    pagination_class = BillingPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = BillFilter

    def get_queryset(self):
        return store_bills(
            store_id=self.kwargs["store_id"],
            include_deleted=_include_deleted(self.request),
        )

    @extend_schema(
        responses={200: BillListItemSerializer(many=True)},
        description="Search bills of a store (from, to, status, q, sort; paginated)",
    )
    def get(self, request, store_id):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(
        request=SaveBillInputSerializer,
        responses={201: BillDetailSerializer},
        parameters=[
            OpenApiParameter(
                name="Idempotency-Key",
                location=OpenApiParameter.HEADER,
                required=False,
                type=str,
            )
        ],
        description="Create a bill: price lines, take payments, debit/credit customer advance",
    )
    def post(self, request, store_id):
        ser = SaveBillInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            saved = save_bill(
                store_id=store_id,
                payload=ser.validated_data,
                acting_user=request.user,
                idempotency_key=idempotency_key_from(request, ser.validated_data),
            )
        except HANDLED_ERRORS as exc:
            return domain_error_response(exc)

        bill = get_bill(store_id=store_id, bill_id=saved.bill.id)
        data = dict(BillDetailSerializer(bill).data)
        data["is_new_customer"] = saved.is_new_customer
        data["excessAmountAddedToAdvance"] = (
            str(saved.excess_amount_added_to_advance)
            if saved.excess_amount_added_to_advance is not None
            else None
        )
        return Response(data, status=status.HTTP_201_CREATED)


class BillDetailView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = BillDetailSerializer

    @extend_schema(responses={200: BillDetailSerializer})
    def get(self, request, store_id, bill_id):
        try:
            bill = get_bill(store_id=store_id, bill_id=bill_id)
        except HANDLED_ERRORS as exc:
            return domain_error_response(exc)
        return Response(BillDetailSerializer(bill).data)


class BillDeleteView(APIView):
    """
    Soft delete. Payments and advance movements of a deleted bill stay as they are.
    """

    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = DeleteBillsInputSerializer

    @extend_schema(
        request=DeleteBillsInputSerializer,
        responses={200: dict},
        description="Mark up to 50 bills as deleted",
    )
    def post(self, request, store_id):
        ser = DeleteBillsInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        bill_ids = ser.validated_data["bill_ids"]
        if len(bill_ids) > MAX_BILLS_PER_DELETE:
            return Response(
                {"detail": f"At most {MAX_BILLS_PER_DELETE} bills can be deleted at once"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = soft_delete_bills(
            store_id=store_id, bill_ids=bill_ids, acting_user=request.user
        )
        return Response(result, status=status.HTTP_200_OK)


class CustomerBillsView(GenericAPIView):
    """
    CUSTOMER STATEMENT

    - summary covers ALL non-deleted bills of the customer (filters do not apply)
    - results honour from / to / status / due_only / sort
    """

    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = CustomerBillSerializer
    pagination_class = BillingPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = CustomerBillFilter

    def get_queryset(self):
        return store_bills(
            store_id=self.kwargs["store_id"],
            include_deleted=_include_deleted(self.request),
        ).filter(customer_id=self.kwargs["customer_id"])

    @extend_schema(responses={200: CustomerBillSerializer(many=True)})
    def get(self, request, store_id, customer_id):
        try:
            customer = get_store_customer(store_id=store_id, customer_id=customer_id)
        except CustomerNotFound:
            return Response(
                {"detail": "Customer not found in this store"},
                status=status.HTTP_404_NOT_FOUND,
            )

        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        serializer = self.get_serializer(page, many=True)
        response = self.get_paginated_response(serializer.data)

        response.data["customer"] = CustomerSummarySerializer(customer).data
        response.data["summary"] = {
            key: str(value) if not isinstance(value, int) else value
            for key, value in customer_bill_summary(
                store_id=store_id, customer_id=customer.id
            ).items()
        }
        return response
