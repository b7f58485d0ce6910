# frontdesk/models/__init__.py

from .appointment import Appointment, AppointmentService
from .booking import Booking, BookingItem
from .enquiry import Enquiry, EnquiryDetail

__all__ = [
    "Appointment",
    "AppointmentService",
    "Booking",
    "BookingItem",
    "Enquiry",
    "EnquiryDetail",
]
