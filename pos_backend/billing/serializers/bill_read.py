# billing/serializers/bill_read.py

from rest_framework import serializers

from billing.models import Bill, BillItem, BillPayment
from billing.services.payment_status import resolve_payment_status
from store.models import Store


class BillItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillItem
        fields = [
            "id",
            "line_no",
            "item_type",
            "catalog_id",
            "name",
            "staff_id",
            "qty",
            "pricing_mode",
            "unit_price",
            "discount_type",
            "discount_value",
            "cgst_rate",
            "sgst_rate",
            "base_amount",
            "discount_amount",
            "taxable_amount",
            "cgst_amount",
            "sgst_amount",
            "tax_amount",
            "line_total",
        ]
        read_only_fields = fields


class BillPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillPayment
        fields = ["id", "mode", "amount", "reference", "timestamp"]
        read_only_fields = fields


class BillCustomerSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    phone_number = serializers.CharField()
    email = serializers.CharField()
    gender = serializers.CharField()
    advance_amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class BillStoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ["id", "name", "code", "address", "phone"]
        read_only_fields = fields


class BillDetailSerializer(serializers.ModelSerializer):
    """
    Full bill view (read-only):
    - bill header + totals
    - priced items in line order
    - payment instruments in insert order
    """

    customer = BillCustomerSerializer(read_only=True)
    store = BillStoreSerializer(read_only=True)
    items = BillItemSerializer(many=True, read_only=True)
    payments = BillPaymentSerializer(many=True, read_only=True)
    totals = serializers.SerializerMethodField()

    class Meta:
        model = Bill
        fields = [
            "id",
            "invoice_number",
            "status",
            "payment_mode",
            "payment_amount",
            "coupon_code",
            "coupon_codes",
            "referral_code",
            "appointment_id",
            "billing_timestamp",
            "payment_timestamp",
            "created_at",
            "deleted_at",
            "customer",
            "store",
            "items",
            "payments",
            "totals",
        ]
        read_only_fields = fields

    def get_totals(self, obj):
        return {
            "sub_total": str(obj.sub_total),
            "discount": str(obj.discount),
            "tax_amount": str(obj.tax_amount),
            "cgst_amount": str(obj.cgst_amount),
            "sgst_amount": str(obj.sgst_amount),
            "grand_total": str(obj.grand_total),
            "paid_amount": str(obj.paid_amount),
            "dues": str(obj.dues),
            "status": obj.status,
        }


class BillListItemSerializer(serializers.ModelSerializer):
    bill_id = serializers.UUIDField(source="id", read_only=True)
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    customer_phone = serializers.CharField(source="customer.phone_number", read_only=True)
    paid = serializers.DecimalField(
        source="paid_amount", max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = Bill
        fields = [
            "bill_id",
            "invoice_number",
            "billing_timestamp",
            "created_at",
            "customer_name",
            "customer_phone",
            "grand_total",
            "paid",
            "dues",
            "status",
            "payment_mode",
        ]
        read_only_fields = fields


class CustomerBillSerializer(BillListItemSerializer):
    """Customer statement row; payment_status is derived, never trusted from status."""

    payment_status = serializers.SerializerMethodField()
    is_overdue = serializers.BooleanField(read_only=True)

    class Meta(BillListItemSerializer.Meta):
        fields = BillListItemSerializer.Meta.fields + ["payment_status", "is_overdue"]
        read_only_fields = fields

    def get_payment_status(self, obj):
        return resolve_payment_status(obj.grand_total, obj.paid_amount).status
