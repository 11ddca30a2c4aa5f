from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.api.schemas import (
    BookingCancelRequest,
    BookingCreateRequest,
    BookingRescheduleRequest,
    BookingResponse,
    EmailLogResponse,
)
from app.config import settings
from app.database import get_db
from app.services.booking_lifecycle import BookingLifecycleManager
from app.services.email_service import EmailService, get_email_service

router = APIRouter()


def get_lifecycle_manager(
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> BookingLifecycleManager:
    """Dependency injection for BookingLifecycleManager"""
    return BookingLifecycleManager(db, email_service)


@router.get("/bookings", response_model=list[BookingResponse], tags=["bookings"])
def get_bookings(manager: BookingLifecycleManager = Depends(get_lifecycle_manager)):
    """Get all bookings"""
    return [BookingResponse.from_booking(b) for b in manager.list_bookings()]


@router.get("/bookings/{booking_id}", response_model=BookingResponse, tags=["bookings"])
def get_booking(booking_id: int, manager: BookingLifecycleManager = Depends(get_lifecycle_manager)):
    """Get a booking by id"""
    return BookingResponse.from_booking(manager.get_booking(booking_id))


@router.post(
    "/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["bookings"],
)
def create_booking(
    payload: BookingCreateRequest,
    request: Request,
    response: Response,
    manager: BookingLifecycleManager = Depends(get_lifecycle_manager),
):
    """
    Create a booking.

    - Status starts as Pending
    - Location header points at the new booking
    """
    booking = manager.create_booking(
        customer_id=payload.customerId,
        stylist_id=payload.stylistId,
        service_id=payload.serviceId,
        date_time=payload.dateTime,
        notes=payload.notes,
    )
    response.headers["Location"] = str(request.url_for("get_booking", booking_id=booking.id))
    return BookingResponse.from_booking(booking)


@router.put("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["bookings"])
def update_booking(
    booking_id: int,
    payload: BookingCreateRequest,
    manager: BookingLifecycleManager = Depends(get_lifecycle_manager),
):
    """Overwrite a booking's date, customer, stylist, service and notes"""
    manager.update_booking(
        booking_id,
        customer_id=payload.customerId,
        stylist_id=payload.stylistId,
        service_id=payload.serviceId,
        date_time=payload.dateTime,
        notes=payload.notes,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/bookings/{booking_id}/reschedule",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["bookings"],
)
def reschedule_booking(
    booking_id: int,
    payload: BookingRescheduleRequest,
    manager: BookingLifecycleManager = Depends(get_lifecycle_manager),
):
    """Move a booking to a new time and email the customer"""
    manager.reschedule_booking(booking_id, payload.newDateTime, payload.reason)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/bookings/{booking_id}/cancel",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["bookings"],
)
def cancel_booking(
    booking_id: int,
    payload: BookingCancelRequest,
    manager: BookingLifecycleManager = Depends(get_lifecycle_manager),
):
    """Cancel a booking and email the customer"""
    manager.cancel_booking(booking_id, payload.cancellationReason)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/bookings/{booking_id}/confirm",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["bookings"],
)
def confirm_booking(booking_id: int, manager: BookingLifecycleManager = Depends(get_lifecycle_manager)):
    manager.confirm_booking(booking_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/bookings/{booking_id}/complete",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["bookings"],
)
def complete_booking(booking_id: int, manager: BookingLifecycleManager = Depends(get_lifecycle_manager)):
    """Mark a booking as completed and send the customer a thank-you email"""
    manager.complete_booking(booking_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/bookings/{booking_id}/emaillogs",
    response_model=list[EmailLogResponse],
    tags=["bookings"],
)
def get_booking_email_logs(
    booking_id: int, manager: BookingLifecycleManager = Depends(get_lifecycle_manager)
):
    """Get the emails sent for a booking"""
    return [EmailLogResponse.model_validate(log) for log in manager.get_email_logs(booking_id)]


@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "ok", "app": settings.app_name}
