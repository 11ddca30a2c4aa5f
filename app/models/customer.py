from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.database import Base


class Customer(Base):
    """Salon customer"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, default="")

    # Relationships
    bookings = relationship("Booking", back_populates="customer", passive_deletes="all")
