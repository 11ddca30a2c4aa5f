"""
Request/response models for the HTTP API
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer, field_validator

from app.models import Booking, BookingStatus, EmailNotificationType


def as_utc(value: datetime) -> datetime:
    """Attach UTC to the naive timestamps read from the database"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BookingCreateRequest(BaseModel):
    """Request body for creating or fully updating a booking"""

    dateTime: datetime
    customerId: int
    stylistId: int
    serviceId: int
    notes: Optional[str] = None


class BookingRescheduleRequest(BaseModel):
    newDateTime: datetime
    reason: Optional[str] = None


class BookingCancelRequest(BaseModel):
    cancellationReason: str


class BookingResponse(BaseModel):
    """Booking as returned to clients, with related names resolved"""

    id: int
    dateTime: datetime
    customerId: int
    stylistId: int
    serviceId: int
    customerName: str = ""
    stylistName: str = ""
    serviceName: str = ""
    status: BookingStatus
    notes: str = ""
    cancellationReason: str = ""
    createdDate: datetime
    lastModifiedDate: datetime

    @field_serializer("dateTime", "createdDate", "lastModifiedDate")
    def serialize_utc(self, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            dateTime=booking.date_time,
            customerId=booking.customer_id,
            stylistId=booking.stylist_id,
            serviceId=booking.service_id,
            customerName=booking.customer.full_name if booking.customer else "",
            stylistName=booking.stylist.name if booking.stylist else "",
            serviceName=booking.service.name if booking.service else "",
            status=booking.status,
            notes=booking.notes or "",
            cancellationReason=booking.cancellation_reason or "",
            createdDate=booking.created_date,
            lastModifiedDate=booking.last_modified_date,
        )


class EmailLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    bookingId: int = Field(validation_alias="booking_id")
    notificationType: EmailNotificationType = Field(validation_alias="notification_type")
    sentDate: datetime = Field(validation_alias="sent_date")
    message: str

    @field_serializer("sentDate")
    def serialize_utc(self, value: datetime) -> datetime:
        return as_utc(value)


class CustomerRequest(BaseModel):
    fullName: str = Field(min_length=1, max_length=100)
    email: Union[EmailStr, Literal[""]] = ""

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v):
        if len(v) > 100:
            raise ValueError("email must be at most 100 characters")
        return v


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    fullName: str = Field(validation_alias="full_name")
    email: str


class StylistRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    specialty: str = Field(min_length=1, max_length=100)


class StylistResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    specialty: str


class ServiceRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(ge=0, max_digits=18, decimal_places=2)


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
