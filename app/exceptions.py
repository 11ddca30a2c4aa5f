"""
Domain errors raised by the booking services and mapped to HTTP in app.main
"""


class BookingError(Exception):
    """Base class for booking domain errors"""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(BookingError):
    """A referenced row does not exist"""

    status_code = 404

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class BookingConflictError(BookingError):
    """The booking row changed since it was read"""

    status_code = 409

    def __init__(self, booking_id: int):
        super().__init__(f"Booking {booking_id} was modified by another request")
        self.booking_id = booking_id


class InvalidTransitionError(BookingError):
    status_code = 409

    def __init__(self, booking_id: int, current: str, target: str):
        super().__init__(f"Booking {booking_id} cannot move from {current} to {target}")
        self.booking_id = booking_id
        self.current = current
        self.target = target


class NotificationError(BookingError):
    """The mail transport did not accept the message"""

    status_code = 502


class BookingReadBackError(BookingError):
    """A freshly written booking could not be read back"""

    status_code = 500
