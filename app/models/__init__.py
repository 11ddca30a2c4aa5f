from app.models.enums import BookingStatus, EmailNotificationType
from app.models.customer import Customer
from app.models.stylist import Stylist
from app.models.service import Service
from app.models.booking import Booking
from app.models.email_log import EmailLog

__all__ = [
    "BookingStatus",
    "EmailNotificationType",
    "Customer",
    "Stylist",
    "Service",
    "Booking",
    "EmailLog",
]
