# frontdesk/serializers/enquiry.py

from decimal import Decimal

from rest_framework import serializers

from frontdesk.models import Enquiry, EnquiryDetail


class EnquiryDetailInputSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=EnquiryDetail.CATEGORY_CHOICES)
    name = serializers.CharField(max_length=255)
    reference_id = serializers.CharField(max_length=255, required=False, allow_blank=True)


class EnquiryInputSerializer(serializers.Serializer):
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
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True)
    gender = serializers.ChoiceField(choices=Enquiry.GENDER_CHOICES)

    source = serializers.ChoiceField(choices=Enquiry.SOURCE_CHOICES)
    enquiry_type = serializers.ChoiceField(choices=Enquiry.TYPE_CHOICES)
    enquiry_status = serializers.ChoiceField(
        choices=Enquiry.STATUS_CHOICES, required=False, default="pending"
    )
    notes = serializers.CharField(required=False, allow_blank=True)
    follow_up_at = serializers.DateTimeField(required=False, allow_null=True)

    details = EnquiryDetailInputSerializer(many=True, required=False, default=list)

    advance_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        default=Decimal("0.00"),
    )


class EnquiryDetailSerializer(serializers.ModelSerializer):
    class Meta:
        model = EnquiryDetail
        fields = ["id", "category", "name", "reference_id"]
        read_only_fields = fields


class EnquirySerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True, allow_null=True)
    details = EnquiryDetailSerializer(many=True, read_only=True)

    class Meta:
        model = Enquiry
        fields = [
            "id",
            "customer_id",
            "country_code",
            "contact_no",
            "name",
            "email",
            "gender",
            "source",
            "enquiry_type",
            "enquiry_status",
            "notes",
            "follow_up_at",
            "details",
            "advance_amount",
            "created_at",
        ]
        read_only_fields = fields
