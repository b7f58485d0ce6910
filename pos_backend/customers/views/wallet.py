# customers/views/wallet.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from customers.serializers import WalletHistoryEntrySerializer
from customers.services.customer_resolver import get_store_customer
from customers.services.exceptions import CustomerNotFound
from customers.services.ledger import get_wallet_history
from store.permissions import HasStoreAccess


class CustomerAdvanceView(GenericAPIView):
    """
    CUSTOMER ADVANCE BALANCE + WALLET HISTORY (READ-ONLY)

    - advance_amount comes straight from the customer row
    - history is newest first, paginated (page, page_size)
    """

    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = WalletHistoryEntrySerializer

    @extend_schema(
        responses={200: WalletHistoryEntrySerializer(many=True)},
        description="Current advance balance and paginated wallet history for a store customer",
    )
    def get(self, request, store_id, customer_id):
        try:
            customer = get_store_customer(store_id=store_id, customer_id=customer_id)
        except CustomerNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        page = self.paginate_queryset(get_wallet_history(customer_id=customer.id))
        serializer = self.get_serializer(page, many=True)
        response = self.get_paginated_response(serializer.data)

        response.data["customer_id"] = str(customer.id)
        response.data["advance_amount"] = str(customer.advance_amount)
        return response
