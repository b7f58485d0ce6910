# customers/serializers/wallet.py

from rest_framework import serializers

from customers.models import Customer, WalletHistoryEntry


class WalletHistoryEntrySerializer(serializers.ModelSerializer):
    """Advance-balance movement (read-only). Debits carry negative amounts."""

    class Meta:
        model = WalletHistoryEntry
        fields = [
            "id",
            "amount",
            "transaction_type",
            "reference_type",
            "reference_id",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class CustomerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "phone_number",
            "email",
            "gender",
            "referral_code",
            "advance_amount",
            "dues",
            "loyalty_points",
            "status",
        ]
        read_only_fields = fields
