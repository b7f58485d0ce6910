# frontdesk/views/records.py

"""
FRONT DESK API VIEWS

- POST appointments/                    create (customer resolve + advance credit)
- PUT  appointments/<appointment_id>/   full update (advance delta moved through the ledger)
- POST bookings/                        create
- PUT  bookings/<booking_id>/           full update (customer change moves the advance)
- POST enquiries/                       create

Every response carries the record, the resolved customer and is_new_customer.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from customers.serializers import CustomerSummarySerializer
from customers.services.exceptions import (
    CustomerNotFound,
    InsufficientBalance,
    InvalidLedgerAmount,
    MissingPhoneNumber,
)
from frontdesk.serializers import (
    AppointmentInputSerializer,
    AppointmentSerializer,
    BookingInputSerializer,
    BookingSerializer,
    EnquiryInputSerializer,
    EnquirySerializer,
)
from frontdesk.services.appointments import create_appointment, update_appointment
from frontdesk.services.bookings import create_booking, update_booking
from frontdesk.services.enquiries import create_enquiry
from frontdesk.services.exceptions import (
    AppointmentNotFound,
    BookingNotFound,
    ServiceNotFound,
)
from store.permissions import HasStoreAccess


def _error(exc, http_status):
    return Response({"detail": str(exc)}, status=http_status)


def _record_response(*, key, record_data, result, http_status):
    return Response(
        {
            key: record_data,
            "customer": (
                CustomerSummarySerializer(result.customer).data
                if result.customer is not None
                else None
            ),
            "is_new_customer": result.is_new_customer,
        },
        status=http_status,
    )


class AppointmentCreateView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = AppointmentInputSerializer

    @extend_schema(
        request=AppointmentInputSerializer,
        responses={201: AppointmentSerializer},
        description="Create an appointment; a positive advance is credited to the customer",
    )
    def post(self, request, store_id):
        ser = AppointmentInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            result = create_appointment(
                store_id=store_id, data=ser.validated_data, acting_user=request.user
            )
        except CustomerNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except (ServiceNotFound, MissingPhoneNumber, InvalidLedgerAmount) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        return _record_response(
            key="appointment",
            record_data=AppointmentSerializer(result.appointment).data,
            result=result,
            http_status=status.HTTP_201_CREATED,
        )


class AppointmentUpdateView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = AppointmentInputSerializer

    @extend_schema(
        request=AppointmentInputSerializer,
        responses={200: AppointmentSerializer},
        description="Replace an appointment; advance changes move through the customer ledger",
    )
    def put(self, request, store_id, appointment_id):
        ser = AppointmentInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            result = update_appointment(
                store_id=store_id,
                appointment_id=appointment_id,
                data=ser.validated_data,
                acting_user=request.user,
            )
        except (AppointmentNotFound, CustomerNotFound) as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except (ServiceNotFound, MissingPhoneNumber, InvalidLedgerAmount) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except InsufficientBalance as exc:
            return _error(exc, status.HTTP_409_CONFLICT)

        return _record_response(
            key="appointment",
            record_data=AppointmentSerializer(result.appointment).data,
            result=result,
            http_status=status.HTTP_200_OK,
        )


class BookingCreateView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = BookingInputSerializer

    @extend_schema(
        request=BookingInputSerializer,
        responses={201: BookingSerializer},
        description="Create a booking; a positive advance is credited to the customer",
    )
    def post(self, request, store_id):
        ser = BookingInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            result = create_booking(
                store_id=store_id, data=ser.validated_data, acting_user=request.user
            )
        except CustomerNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except (ServiceNotFound, MissingPhoneNumber, InvalidLedgerAmount) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        return _record_response(
            key="booking",
            record_data=BookingSerializer(result.booking).data,
            result=result,
            http_status=status.HTTP_201_CREATED,
        )


class BookingUpdateView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = BookingInputSerializer

    @extend_schema(
        request=BookingInputSerializer,
        responses={200: BookingSerializer},
        description="Replace a booking; a customer change moves the advance to the new customer",
    )
    def put(self, request, store_id, booking_id):
        ser = BookingInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            result = update_booking(
                store_id=store_id,
                booking_id=booking_id,
                data=ser.validated_data,
                acting_user=request.user,
            )
        except (BookingNotFound, CustomerNotFound) as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except (ServiceNotFound, MissingPhoneNumber, InvalidLedgerAmount) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except InsufficientBalance as exc:
            return _error(exc, status.HTTP_409_CONFLICT)

        return _record_response(
            key="booking",
            record_data=BookingSerializer(result.booking).data,
            result=result,
            http_status=status.HTTP_200_OK,
        )


class EnquiryCreateView(APIView):
    permission_classes = [IsAuthenticated, HasStoreAccess]
    serializer_class = EnquiryInputSerializer

    @extend_schema(
        request=EnquiryInputSerializer,
        responses={201: EnquirySerializer},
        description="Capture an enquiry; the contact is resolved to a customer",
    )
    def post(self, request, store_id):
        ser = EnquiryInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            result = create_enquiry(
                store_id=store_id, data=ser.validated_data, acting_user=request.user
            )
        except (MissingPhoneNumber, InvalidLedgerAmount) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        return _record_response(
            key="enquiry",
            record_data=EnquirySerializer(result.enquiry).data,
            result=result,
            http_status=status.HTTP_201_CREATED,
        )
