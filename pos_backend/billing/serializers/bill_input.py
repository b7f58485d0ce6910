# billing/serializers/bill_input.py

"""
BILL INPUT (COMMAND) SERIALIZERS

These serializers do NOT touch the database.
They validate shape and payment semantics; store-scoped checks
(customer/catalog membership, advance balance) happen in the service layer.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from billing.models import Bill, BillItem, BillPayment
from customers.models import Customer

E164_REGEX = r"^\+[1-9]\d{1,14}$"
PAYMENT_TOLERANCE = Decimal("0.01")


class BillItemInputSerializer(serializers.Serializer):
    line_no = serializers.IntegerField(min_value=1)
    type = serializers.ChoiceField(choices=BillItem.TYPE_CHOICES)
    id = serializers.UUIDField()
    staff_id = serializers.UUIDField(required=False, allow_null=True)
    qty = serializers.IntegerField(min_value=1, default=1)

    # present => direct pricing; absent => catalog price
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )

    discount_type = serializers.ChoiceField(choices=BillItem.DISCOUNT_CHOICES)
    discount_value = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, default=Decimal("0.00")
    )
    cgst = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0)
    sgst = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0)

    def validate(self, attrs):
        if attrs["discount_type"] == "percent" and attrs["discount_value"] > 100:
            raise serializers.ValidationError(
                {"discount_value": "Percent discount cannot exceed 100"}
            )
        return attrs


class PaymentInputSerializer(serializers.Serializer):
    mode = serializers.ChoiceField(choices=BillPayment.MODE_CHOICES)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    reference = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    timestamp = serializers.DateTimeField(required=False, allow_null=True)
    payment_timestamp = serializers.DateTimeField(required=False, allow_null=True)

    def validate(self, attrs):
        if not attrs.get("timestamp") and not attrs.get("payment_timestamp"):
            raise serializers.ValidationError(
                {"timestamp": "Payment timestamp is required"}
            )
        return attrs


class InlineCustomerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    gender = serializers.ChoiceField(
        choices=Customer.GENDER_CHOICES, required=False, allow_blank=True
    )
    contact_no = serializers.RegexField(
        E164_REGEX,
        error_messages={"invalid": "Contact number must be in E.164 format"},
    )
    address = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    birthday = serializers.CharField(max_length=10, required=False, allow_blank=True)
    anniversary = serializers.CharField(max_length=10, required=False, allow_blank=True)


class BaseBillInputSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField(required=False, allow_null=True)
    customer = InlineCustomerSerializer(required=False, allow_null=True)
    customer_details = InlineCustomerSerializer(required=False, allow_null=True)

    coupon_code = serializers.CharField(
        max_length=100, required=False, allow_blank=True, allow_null=True
    )
    coupon_codes = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, default=list
    )
    referral_code = serializers.CharField(
        max_length=100, required=False, allow_blank=True, allow_null=True
    )

    items = BillItemInputSerializer(many=True, allow_empty=False)
    discount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, default=Decimal("0.00")
    )

    payment_mode = serializers.ChoiceField(choices=Bill.PAYMENT_MODE_CHOICES)
    payment_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, default=Decimal("0.00")
    )
    payments = PaymentInputSerializer(many=True, required=False)

    billing_timestamp = serializers.DateTimeField()
    payment_timestamp = serializers.DateTimeField(required=False, allow_null=True)
    appointmentId = serializers.UUIDField(
        source="appointment_id", required=False, allow_null=True
    )

    idempotency_key = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):
        supplied = sum(
            1 for key in ("customer_id", "customer", "customer_details") if attrs.get(key)
        )
        if supplied > 1:
            raise serializers.ValidationError(
                "Provide only one of: customer_id, customer, or customer_details"
            )
        if supplied == 0:
            raise serializers.ValidationError(
                "One of customer_id, customer, or customer_details is required"
            )

        line_numbers = [item["line_no"] for item in attrs["items"]]
        if len(line_numbers) != len(set(line_numbers)):
            raise serializers.ValidationError({"items": "line_no must be unique within a bill"})

        attrs.setdefault("payments", [])
        return attrs


class SaveBillInputSerializer(BaseBillInputSerializer):
    """Checkout payload. Payment lines must agree with payment_mode/payment_amount."""

    held_bill_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, attrs):
        attrs = super().validate(attrs)

        mode = attrs["payment_mode"]
        declared = attrs.get("payment_amount") or Decimal("0.00")
        payments = attrs["payments"]

        if mode == "none":
            if declared != 0:
                raise serializers.ValidationError(
                    "payment_amount must be 0 when payment_mode is none"
                )
            if payments:
                raise serializers.ValidationError(
                    {"payments": "No payments allowed when payment_mode is none"}
                )
            return attrs

        if mode == "split" and len(payments) < 2:
            raise serializers.ValidationError("payment_mode split requires multiple payments")

        total = sum((p["amount"] for p in payments), Decimal("0.00"))
        if abs(total - declared) > PAYMENT_TOLERANCE:
            raise serializers.ValidationError(
                "payment_amount must equal sum of payments amounts"
            )

        if mode != "split":
            if len(payments) != 1:
                raise serializers.ValidationError(
                    "Single payment mode should have exactly one payment"
                )
            # an advance line may fund any single declared mode
            if payments[0]["mode"] not in (mode, BillPayment.MODE_ADVANCE):
                raise serializers.ValidationError(
                    "Payment mode must match payment.mode for single payments"
                )

        return attrs


class HoldBillInputSerializer(BaseBillInputSerializer):
    """Draft payload. Same shape as a checkout, payment rules are not enforced."""

    payment_mode = serializers.ChoiceField(
        choices=Bill.PAYMENT_MODE_CHOICES, required=False, default="none"
    )


class DeleteBillsInputSerializer(serializers.Serializer):
    bill_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
