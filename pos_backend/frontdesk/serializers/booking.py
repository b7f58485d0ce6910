# frontdesk/serializers/booking.py

from decimal import Decimal

from rest_framework import serializers

from frontdesk.models import Booking, BookingItem


class BookingItemInputSerializer(serializers.Serializer):
    service_id = serializers.UUIDField()
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00")
    )
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    staff_id = serializers.UUIDField(required=False, allow_null=True)
    staff_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    scheduled_at = serializers.DateTimeField(required=False, allow_null=True)
    venue = serializers.CharField(max_length=255, required=False, allow_blank=True)


class BookingInputSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField(required=False, allow_null=True)
    country_code = serializers.RegexField(
        r"^\+[1-9]\d{0,3}$",
        max_length=10,
        error_messages={"invalid": "Country code must look like +91"},
    )
    contact_no = serializers.RegexField(
        r"^\d{4,15}$",
        max_length=20,
        error_messages={"invalid": "Contact number must be digits only"},
    )
    customer_name = serializers.CharField(max_length=150)
    gender = serializers.ChoiceField(choices=Booking.GENDER_CHOICES)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)

    booking_datetime = serializers.DateTimeField()
    venue_type = serializers.ChoiceField(choices=Booking.VENUE_CHOICES)
    remarks = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Booking.STATUS_CHOICES, required=False)

    items = BookingItemInputSerializer(many=True, allow_empty=False)

    advance_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        default=Decimal("0.00"),
    )
    payment_mode = serializers.ChoiceField(choices=Booking.PAYMENT_MODE_CHOICES)


class BookingItemSerializer(serializers.ModelSerializer):
    service_id = serializers.UUIDField(read_only=True)
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = BookingItem
        fields = [
            "id",
            "service_id",
            "service_name",
            "unit_price",
            "quantity",
            "line_total",
            "staff_id",
            "staff_name",
            "scheduled_at",
            "venue",
        ]
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True, allow_null=True)
    items = BookingItemSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "customer_id",
            "country_code",
            "contact_no",
            "phone_number",
            "customer_name",
            "gender",
            "email",
            "address",
            "booking_datetime",
            "venue_type",
            "remarks",
            "status",
            "items",
            "total_amount",
            "advance_amount",
            "payable_amount",
            "payment_mode",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
