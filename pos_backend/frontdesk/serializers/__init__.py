# frontdesk/serializers/__init__.py

from .appointment import AppointmentInputSerializer, AppointmentSerializer
from .booking import BookingInputSerializer, BookingSerializer
from .enquiry import EnquiryInputSerializer, EnquirySerializer

__all__ = [
    "AppointmentInputSerializer",
    "AppointmentSerializer",
    "BookingInputSerializer",
    "BookingSerializer",
    "EnquiryInputSerializer",
    "EnquirySerializer",
]
