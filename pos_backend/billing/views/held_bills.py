# billing/views/held_bills.py

"""
HELD BILL (DRAFT) VIEWS

- POST   bills/hold/              park a draft
- GET    bills/held/              list drafts, newest first
- GET    bills/held/<held_id>/    stored payload + suggested invoice number
- DELETE bills/held/<held_id>/    discard a draft
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from billing.pagination import HeldBillPagination
from billing.serializers import (
    HeldBillDetailSerializer,
    HeldBillListSerializer,
    HoldBillInputSerializer,
)
from billing.services.held_bill_service import (
    discard_held_bill,
    get_held_bill,
    hold_bill,
    list_held_bills,
)
from billing.views.errors import HANDLED_ERRORS, domain_error_response, idempotency_key_from
from store.permissions import HasStoreAccess


class HoldBillView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = HoldBillInputSerializer

    @extend_schema(
        request=HoldBillInputSerializer,
        responses={201: dict},
        description="Park a draft bill. No invoice number, payments or ledger movement.",
    )
    def post(self, request, store_id):
        ser = HoldBillInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        raw_payload = request.data if isinstance(request.data, dict) else None

        try:
            held = hold_bill(
                store_id=store_id,
                payload=ser.validated_data,
                raw_payload=raw_payload,
                acting_user=request.user,
                idempotency_key=idempotency_key_from(request, ser.validated_data),
            )
        except HANDLED_ERRORS as exc:
            return domain_error_response(exc)

        return Response(
            {"held_id": str(held.id), "created_at": held.created_at},
            status=status.HTTP_201_CREATED,
        )


class HeldBillListView(ListAPIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = HeldBillListSerializer
    pagination_class = HeldBillPagination

    def get_queryset(self):
        return list_held_bills(store_id=self.kwargs["store_id"])


class HeldBillDetailView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = HeldBillDetailSerializer

    @extend_schema(responses={200: HeldBillDetailSerializer})
    def get(self, request, store_id, held_id):
        try:
            resumable = get_held_bill(store_id=store_id, held_id=held_id)
        except HANDLED_ERRORS as exc:
            return domain_error_response(exc)

        serializer = HeldBillDetailSerializer(
            resumable.held,
            context={"suggested_invoice_number": resumable.suggested_invoice_number},
        )
        return Response(serializer.data)

    @extend_schema(responses={204: None})
    def delete(self, request, store_id, held_id):
        try:
            discard_held_bill(store_id=store_id, held_id=held_id)
        except HANDLED_ERRORS as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
