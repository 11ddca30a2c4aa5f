from sqlalchemy import Column, Integer, Numeric, String
from sqlalchemy.orm import relationship
from app.database import Base


class Service(Base):
    """Bookable salon service with a fixed price"""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(18, 2), nullable=False, default=0)

    # Relationships
    bookings = relationship("Booking", back_populates="service", passive_deletes="all")
