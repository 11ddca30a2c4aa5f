"""
Booking lifecycle: state transitions, persistence and customer notifications
"""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from app.exceptions import (
    BookingConflictError,
    BookingReadBackError,
    InvalidTransitionError,
    NotFoundError,
    NotificationError,
)
from app.models import (
    Booking,
    BookingStatus,
    Customer,
    EmailLog,
    EmailNotificationType,
    Service,
    Stylist,
)
from app.services.email_service import EmailService, get_email_service

logger = logging.getLogger(__name__)

RESCHEDULED_SUBJECT = "Your appointment has been rescheduled"
CANCELLED_SUBJECT = "Your appointment has been cancelled"
COMPLETED_SUBJECT = "Your appointment has been completed"

CONFIRMABLE = {BookingStatus.PENDING, BookingStatus.RESCHEDULED}
COMPLETABLE = {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.RESCHEDULED}


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_appointment(value: datetime) -> str:
    """Human-readable appointment time for email bodies, e.g. June 01, 2025 at 10:00 AM"""
    return value.strftime("%B %d, %Y at %I:%M %p")


class BookingLifecycleManager:
    """
    Applies booking transitions against an explicit database session.

    Every mutation commits before any email goes out. Delivered emails are
    recorded as EmailLog rows; a transport failure propagates as
    NotificationError with the transition already committed.
    """

    def __init__(self, db: Session, email_service: EmailService | None = None):
        self.db = db
        self.email_service = email_service or get_email_service()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _query(self):
        return self.db.query(Booking).options(
            joinedload(Booking.customer),
            joinedload(Booking.stylist),
            joinedload(Booking.service),
        )

    def list_bookings(self) -> list[Booking]:
        return self._query().order_by(Booking.id).all()

    def get_booking(self, booking_id: int) -> Booking:
        booking = self._query().filter(Booking.id == booking_id).first()
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    def get_email_logs(self, booking_id: int) -> list[EmailLog]:
        """All email logs for a booking, oldest first"""
        if not self._exists(booking_id):
            raise NotFoundError("Booking", booking_id)
        return (
            self.db.query(EmailLog)
            .filter(EmailLog.booking_id == booking_id)
            .order_by(EmailLog.id)
            .all()
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def create_booking(
        self,
        customer_id: int,
        stylist_id: int,
        service_id: int,
        date_time: datetime,
        notes: str | None = None,
    ) -> Booking:
        """Create a Pending booking and return it read back with its relations"""
        self._require_references(customer_id, stylist_id, service_id)

        now = utcnow()
        booking = Booking(
            date_time=to_naive_utc(date_time),
            customer_id=customer_id,
            stylist_id=stylist_id,
            service_id=service_id,
            notes=notes or "",
            cancellation_reason="",
            status=BookingStatus.PENDING,
            created_date=now,
            last_modified_date=now,
        )
        self.db.add(booking)
        self.db.commit()
        booking_id = booking.id

        created = self._query().filter(Booking.id == booking_id).first()
        if created is None:
            logger.error("Booking %s could not be read back after insert", booking_id)
            raise BookingReadBackError("An error occurred while retrieving the booking.")

        logger.info("Created booking %s for customer %s", booking_id, customer_id)
        return created

    def update_booking(
        self,
        booking_id: int,
        customer_id: int,
        stylist_id: int,
        service_id: int,
        date_time: datetime,
        notes: str | None = None,
    ) -> Booking:
        """Overwrite all editable fields; status is left alone"""
        booking = self._load(booking_id)
        self._require_references(customer_id, stylist_id, service_id)

        booking.date_time = to_naive_utc(date_time)
        booking.customer_id = customer_id
        booking.stylist_id = stylist_id
        booking.service_id = service_id
        booking.notes = notes or ""
        self._touch(booking)
        self._commit(booking_id)

        logger.info("Updated booking %s", booking_id)
        return booking

    def reschedule_booking(
        self, booking_id: int, new_date_time: datetime, reason: str | None = None
    ) -> Booking:
        booking = self._load(booking_id)

        booking.date_time = to_naive_utc(new_date_time)
        booking.status = BookingStatus.RESCHEDULED
        self._touch(booking)
        self._commit(booking_id)
        logger.info("Rescheduled booking %s to %s", booking_id, booking.date_time)

        body = f"Your appointment has been rescheduled to {format_appointment(booking.date_time)}."
        if reason:
            body += f" Reason: {reason}"
        self._notify(booking, RESCHEDULED_SUBJECT, body, EmailNotificationType.RESCHEDULED)
        return booking

    def cancel_booking(self, booking_id: int, cancellation_reason: str) -> Booking:
        booking = self._load(booking_id)

        booking.status = BookingStatus.CANCELLED
        booking.cancellation_reason = cancellation_reason
        self._touch(booking)
        self._commit(booking_id)
        logger.info("Cancelled booking %s", booking_id)

        body = (
            f"Your appointment scheduled for {format_appointment(booking.date_time)} "
            f"has been cancelled. Reason: {cancellation_reason}"
        )
        self._notify(booking, CANCELLED_SUBJECT, body, EmailNotificationType.DELETED)
        return booking

    def confirm_booking(self, booking_id: int) -> Booking:
        booking = self._load(booking_id)
        self._check_transition(booking, CONFIRMABLE, BookingStatus.CONFIRMED)

        booking.status = BookingStatus.CONFIRMED
        self._touch(booking)
        self._commit(booking_id)

        logger.info("Confirmed booking %s", booking_id)
        return booking

    def complete_booking(self, booking_id: int) -> Booking:
        booking = self._load(booking_id)
        self._check_transition(booking, COMPLETABLE, BookingStatus.COMPLETED)

        booking.status = BookingStatus.COMPLETED
        self._touch(booking)
        self._commit(booking_id)
        logger.info("Completed booking %s", booking_id)

        body = (
            f"Your appointment on {format_appointment(booking.date_time)} has been completed. "
            "Thank you for visiting us!"
        )
        self._notify(booking, COMPLETED_SUBJECT, body, EmailNotificationType.COMPLETED)
        return booking

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _exists(self, booking_id: int) -> bool:
        return self.db.query(Booking.id).filter(Booking.id == booking_id).first() is not None

    def _load(self, booking_id: int) -> Booking:
        booking = self.db.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    def _require_references(self, customer_id: int, stylist_id: int, service_id: int):
        for model, entity_id in ((Customer, customer_id), (Stylist, stylist_id), (Service, service_id)):
            if self.db.get(model, entity_id) is None:
                raise NotFoundError(model.__name__, entity_id)

    @staticmethod
    def _check_transition(booking: Booking, allowed: set, target: BookingStatus):
        if booking.status not in allowed:
            raise InvalidTransitionError(booking.id, booking.status.value, target.value)

    @staticmethod
    def _touch(booking: Booking):
        # last_modified_date must strictly increase on every mutation
        now = utcnow()
        previous = booking.last_modified_date
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        booking.last_modified_date = now

    def _commit(self, booking_id: int):
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            if not self._exists(booking_id):
                logger.warning("Booking %s vanished during a concurrent write", booking_id)
                raise NotFoundError("Booking", booking_id) from e
            logger.warning("Concurrent modification of booking %s", booking_id)
            raise BookingConflictError(booking_id) from e

    def _notify(
        self,
        booking: Booking,
        subject: str,
        body: str,
        notification_type: EmailNotificationType,
    ) -> EmailLog | None:
        """Email the booking's customer and record the send; no-op without an address"""
        customer = booking.customer
        to_email = customer.email if customer else None
        if not to_email:
            logger.info("Booking %s has no customer email - skipping %s notification",
                        booking.id, notification_type.value)
            return None

        try:
            self.email_service.send_email(to_email, subject, body)
        except NotificationError as e:
            raise NotificationError(
                f"Booking {booking.id} was updated but the {notification_type.value.lower()} "
                f"notification could not be delivered: {e.detail}"
            ) from e

        email_log = EmailLog(
            booking_id=booking.id,
            notification_type=notification_type,
            sent_date=utcnow(),
            message=body,
        )
        self.db.add(email_log)
        self.db.commit()
        return email_log
