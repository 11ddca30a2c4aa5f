import enum


class BookingStatus(str, enum.Enum):
    """Lifecycle states of a booking"""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    RESCHEDULED = "Rescheduled"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class EmailNotificationType(str, enum.Enum):
    CREATED = "Created"
    RESCHEDULED = "Rescheduled"
    DELETED = "Deleted"
    COMPLETED = "Completed"
