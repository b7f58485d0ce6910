# frontdesk/services/exceptions.py


class FrontdeskError(Exception):
    """Base exception for appointment / booking / enquiry failures."""


class AppointmentNotFound(FrontdeskError):
    pass


class BookingNotFound(FrontdeskError):
    pass


class ServiceNotFound(FrontdeskError):
    """A referenced catalog service does not exist in the store."""
