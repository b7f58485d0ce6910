# frontdesk/serializers/appointment.py

from decimal import Decimal

from rest_framework import serializers

from frontdesk.models import Appointment, AppointmentService


class AppointmentServiceInputSerializer(serializers.Serializer):
    service_id = serializers.UUIDField()
    staff_id = serializers.UUIDField(required=False, allow_null=True)
    position = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class AppointmentInputSerializer(serializers.Serializer):
    """
    Create / full update of an appointment.

    Totals are computed from the catalog; the client supplies only the advance.
    """

    customer_id = serializers.UUIDField(required=False, allow_null=True)
    phone_number = serializers.CharField(max_length=32)
    customer_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    gender = serializers.CharField(max_length=16, required=False, allow_blank=True)
    source = serializers.CharField(max_length=50, required=False, allow_blank=True)

    date = serializers.DateField()
    time = serializers.TimeField()
    status = serializers.ChoiceField(choices=Appointment.STATUS_CHOICES, required=False)

    services = AppointmentServiceInputSerializer(many=True, allow_empty=False)

    advance_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        default=Decimal("0.00"),
    )
    payment_mode = serializers.CharField(max_length=30, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class AppointmentServiceSerializer(serializers.ModelSerializer):
    service_id = serializers.UUIDField(read_only=True)
    service_name = serializers.CharField(source="service.name", read_only=True)

    class Meta:
        model = AppointmentService
        fields = ["id", "service_id", "service_name", "staff_id", "position"]
        read_only_fields = fields


class AppointmentSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True, allow_null=True)
    services = AppointmentServiceSerializer(many=True, read_only=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "customer_id",
            "phone_number",
            "customer_name",
            "gender",
            "source",
            "appointment_date",
            "appointment_time",
            "status",
            "services",
            "total_duration_minutes",
            "total_amount",
            "advance_amount",
            "payable_amount",
            "payment_mode",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
