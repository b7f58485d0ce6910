# billing/serializers/held_bill.py

from rest_framework import serializers

from billing.models import HeldBill


class HeldBillListSerializer(serializers.ModelSerializer):
    held_id = serializers.UUIDField(source="id", read_only=True)

    class Meta:
        model = HeldBill
        fields = ["held_id", "created_at", "customer_summary", "amount_estimate"]
        read_only_fields = fields


class HeldBillDetailSerializer(HeldBillListSerializer):
    """Stored payload as sent, plus a fresh invoice number for the resumed bill."""

    suggested_invoice_number = serializers.SerializerMethodField()

    class Meta(HeldBillListSerializer.Meta):
        fields = HeldBillListSerializer.Meta.fields + ["payload", "suggested_invoice_number"]
        read_only_fields = fields

    def get_suggested_invoice_number(self, obj):
        return self.context.get("suggested_invoice_number")
