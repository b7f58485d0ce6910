# frontdesk/urls.py

from django.urls import path

from frontdesk.views import (
    AppointmentCreateView,
    AppointmentUpdateView,
    BookingCreateView,
    BookingUpdateView,
    EnquiryCreateView,
)

urlpatterns = [
    path("appointments/", AppointmentCreateView.as_view(), name="appointment-create"),
    path(
        "appointments/<uuid:appointment_id>/",
        AppointmentUpdateView.as_view(),
        name="appointment-update",
    ),
    path("bookings/", BookingCreateView.as_view(), name="booking-create"),
    path("bookings/<uuid:booking_id>/", BookingUpdateView.as_view(), name="booking-update"),
    path("enquiries/", EnquiryCreateView.as_view(), name="enquiry-create"),
]
