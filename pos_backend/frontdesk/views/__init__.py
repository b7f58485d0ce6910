# frontdesk/views/__init__.py

from .records import (
    AppointmentCreateView,
    AppointmentUpdateView,
    BookingCreateView,
    BookingUpdateView,
    EnquiryCreateView,
)

__all__ = [
    "AppointmentCreateView",
    "AppointmentUpdateView",
    "BookingCreateView",
    "BookingUpdateView",
    "EnquiryCreateView",
]
