from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.enums import EmailNotificationType


class EmailLog(Base):
    """Audit record of a notification sent for a booking"""
    __tablename__ = "email_logs"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    notification_type = Column(
        Enum(EmailNotificationType, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
    )
    sent_date = Column(DateTime, nullable=False)
    message = Column(Text, nullable=False, default="")

    # Relationships
    booking = relationship("Booking", back_populates="email_logs")
