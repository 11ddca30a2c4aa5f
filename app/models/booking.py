from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.enums import BookingStatus


class Booking(Base):
    """Appointment linking a customer, a stylist and a service"""
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    date_time = Column(DateTime, nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    stylist_id = Column(Integer, ForeignKey("stylists.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)
    status = Column(
        Enum(BookingStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    created_date = Column(DateTime, nullable=False)
    last_modified_date = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=False, default="")
    cancellation_reason = Column(Text, nullable=False, default="")
    version_id = Column(Integer, nullable=False)  # optimistic concurrency token

    # Relationships
    customer = relationship("Customer", back_populates="bookings")
    stylist = relationship("Stylist", back_populates="bookings")
    service = relationship("Service", back_populates="bookings")
    email_logs = relationship("EmailLog", back_populates="booking", order_by="EmailLog.id")

    __mapper_args__ = {"version_id_col": version_id}
